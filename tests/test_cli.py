"""
Command line tests
"""

import io
from pathlib import Path

import orjson

from ersatz import __version__
from ersatz.cli import main

FIXTURE_DICT = Path(__file__).parent / "data" / "de.txt"


class TestCli:

    def test_substitute(self, capsys):
        assert main(["substitute", "Ich mag Aepfel"]) == 0
        assert capsys.readouterr().out == "Ich mag Äpfel\n"

    def test_substitute_stdin(self, capsys, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("Suess!\nOel\n"))
        assert main(["substitute"]) == 0
        assert capsys.readouterr().out == "Süß!\nÖl\n"

    def test_check(self, capsys):
        assert main(["check", "Mauerdübelkübel"]) == 0
        out = capsys.readouterr().out
        assert "valid" in out
        assert "Mauer + dübel + kübel" in out

    def test_check_json(self, capsys):
        assert main(["check", "Duebel", "--json"]) == 1
        data = orjson.loads(capsys.readouterr().out)
        assert data == {"word": "Duebel", "valid": False, "parts": None}

    def test_verify_dict(self, capsys):
        assert main(["verify-dict"]) == 0
        assert "OK" in capsys.readouterr().out

    def test_verify_dict_bad(self, tmp_path, capsys):
        path = tmp_path / "bad.txt"
        path.write_text("Haus\nApfel\n", encoding="utf-8")
        assert main(["verify-dict", str(path)]) == 1
        assert "sorts before" in capsys.readouterr().err

    def test_build_dict(self, tmp_path, capsys):
        source = tmp_path / "words.txt"
        source.write_text("Tür\nhaus\n", encoding="utf-8")
        output = tmp_path / "de.txt"
        assert main(["build-dict", str(source), "-o", str(output)]) == 0
        assert output.read_text(encoding="utf-8") == "Tür\nhaus\n"

        capsys.readouterr()
        assert main(["--dict", str(output), "substitute", "Haustuer"]) == 0
        assert capsys.readouterr().out == "Haustür\n"

    def test_version(self, capsys):
        assert main(["version"]) == 0
        assert __version__ in capsys.readouterr().out

    def test_no_command(self, capsys):
        assert main([]) == 1

    def test_fixture_dict(self, capsys):
        assert main(["--dict", str(FIXTURE_DICT), "substitute", "Haustuer und Aepfel"]) == 0
        assert capsys.readouterr().out == "Haustür und Äpfel\n"

    def test_verify_fixture_dict(self, capsys):
        assert main(["verify-dict", str(FIXTURE_DICT)]) == 0
        assert "OK" in capsys.readouterr().out
