import main


def test_check_reports_eligible_media_type(capsys):
    assert main.main(["check", "application/vnd.api+json"]) == 0
    assert "elegível" in capsys.readouterr().out


def test_check_rejects_xml(capsys):
    assert main.main(["check", "text/xml"]) == 2
    assert "não elegível" in capsys.readouterr().out


def test_format_pretty_and_sorted(tmp_path, capsysbinary):
    source = tmp_path / "in.json"
    source.write_text('{"b": 1, "a": null, "c": [1, 2]}', encoding="utf-8")

    assert main.main(["format", str(source), "--pretty", "--sort"]) == 0
    out = capsysbinary.readouterr().out
    assert out == b'{\n\t"b": 1,\n\t"c": [\n\t\t1,\n\t\t2\n\t]\n}\n'


def test_format_keeps_nulls_when_asked(tmp_path, capsysbinary):
    source = tmp_path / "in.json"
    source.write_text('{"a": null}', encoding="utf-8")

    assert main.main(["format", str(source), "--nulls"]) == 0
    assert capsysbinary.readouterr().out == b'{"a":null}\n'


def test_format_invalid_json_exits_with_error(tmp_path):
    source = tmp_path / "bad.json"
    source.write_text('{"a": ', encoding="utf-8")

    assert main.main(["format", str(source)]) == 1


def test_format_keeps_number_text(tmp_path, capsysbinary):
    source = tmp_path / "in.json"
    source.write_text('{"price": 1.10, "big": 12345678901234567.89}', encoding="utf-8")

    assert main.main(["format", str(source)]) == 0
    assert capsysbinary.readouterr().out == b'{"price":1.10,"big":12345678901234567.89}\n'


def test_format_unknown_charset_exits_with_error(tmp_path):
    source = tmp_path / "in.json"
    source.write_text("{}", encoding="utf-8")

    assert main.main(["format", str(source), "--charset", "bogus"]) == 1


def test_format_missing_file_exits_with_error(tmp_path):
    assert main.main(["format", str(tmp_path / "nope.json")]) == 1
