import orjson

from analysis.cli_analyze import discover_files, main
from conftest import build_odt


def _write_corpus(root):
    (root / "essai.txt").write_text(
        "le chat mange le chat mange le chat mange le chat mange", encoding="utf-8"
    )
    (root / "sub").mkdir()
    (root / "sub" / "doc.odt").write_bytes(build_odt("<text:p>Bonjour</text:p>"))
    (root / "ignored.rtf").write_text("{\\rtf1}")


def test_discover_files_filters_directories(tmp_path):
    _write_corpus(tmp_path)
    found = discover_files([tmp_path])
    assert sorted(p.name for p in found) == ["doc.odt", "essai.txt"]

    explicit = tmp_path / "ignored.rtf"
    assert discover_files([explicit]) == [explicit]


def test_cli_writes_reports(tmp_path):
    corpus = tmp_path / "in"
    corpus.mkdir()
    _write_corpus(corpus)
    out = tmp_path / "out" / "report.json"

    assert main([str(corpus), "--output", str(out)]) == 0

    reports = {r["filename"]: r for r in orjson.loads(out.read_bytes())}
    assert reports["essai.txt"]["similarity"]["score"] == 70
    assert reports["doc.odt"]["snippet"] == "Bonjour"
    assert all(r["ok"] for r in reports.values())


def test_cli_reports_failures(tmp_path):
    bad = tmp_path / "broken.odt"
    bad.write_bytes(b"not a zip")
    out = tmp_path / "report.json"

    assert main([str(bad), "--output", str(out)]) == 1

    [report] = orjson.loads(out.read_bytes())
    assert report["ok"] is False
    assert report["filename"] == "broken.odt"
    assert "ODT" in report["error"]


def test_cli_strict_mode(tmp_path):
    rtf = tmp_path / "lettre.rtf"
    rtf.write_text("{\\rtf1}")
    out = tmp_path / "report.json"

    assert main([str(rtf), "--output", str(out)]) == 0
    assert main([str(rtf), "--strict", "--output", str(out)]) == 1


def test_cli_no_documents(tmp_path):
    assert main([str(tmp_path)]) == 1
