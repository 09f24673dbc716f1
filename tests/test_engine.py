"""
Engine tests: end to end substitution and output properties
"""

import threading
from pathlib import Path

import pytest

from ersatz import substitute
from ersatz.dicts import WordList
from ersatz.engine import EngineConfig, EngineOutput, GermanEngine, create_engine

FIXTURE_DICT = Path(__file__).parent / "data" / "de.txt"


@pytest.fixture(scope="module")
def engine():
    return create_engine()


class TestGermanEngine:
    """Engine basics"""

    def test_create_engine(self, engine):
        assert isinstance(engine, GermanEngine)

    def test_create_engine_with_config(self):
        engine = create_engine(EngineConfig(cache_size=16))
        assert engine.config.cache_size == 16
        assert engine.validator.cache.capacity == 16

    def test_injected_word_list(self):
        engine = GermanEngine(words=WordList("Tür\nhaus"))
        assert engine.substitute("Tuer") == "Tür"
        assert engine.substitute("Haustuer") == "Haustür"

    def test_word_list_from_environment(self, monkeypatch):
        monkeypatch.setenv("ERSATZ_DICT", str(FIXTURE_DICT))
        engine = create_engine()
        assert len(engine.words) == 6
        assert engine.substitute("schoen, Fuss") == "schön, Fuß"

    def test_create_engine_keeps_config(self):
        config = EngineConfig(cache_size=16)
        engine = create_engine(config, dict_path=str(FIXTURE_DICT))
        assert config.dict_path is None
        assert engine.config.dict_path == str(FIXTURE_DICT)
        assert engine.config.cache_size == 16

    def test_missing_word_list(self):
        with pytest.raises(FileNotFoundError):
            create_engine(dict_path="/nonexistent/de.txt")

    def test_process_returns_output(self, engine):
        result = engine.process("Aepfel und Birnen")
        assert isinstance(result, EngineOutput)
        assert result.raw_text == "Aepfel und Birnen"
        assert result.text == "Äpfel und Birnen"
        assert [w.original for w in result.words] == ["Aepfel", "und", "Birnen"]
        assert [w.changed for w in result.words] == [True, False, False]
        assert result.words[0].candidates_tried == 1
        assert "elapsed_ms" in result.metadata

    def test_stats(self):
        engine = create_engine()
        engine.substitute("Suess und Aepfel")
        stats = engine.get_stats()
        assert stats["total_requests"] == 1
        assert stats["words"] == 3
        assert stats["replaced"] == 2

    def test_module_level_substitute(self):
        assert substitute("Suess!") == "Süß!"


class TestSubstitute:
    """Reference sentences"""

    @pytest.mark.parametrize("text, expected", [
        ("Ich mag Aepfel, aber nicht Aerger.", "Ich mag Äpfel, aber nicht Ärger."),
        ("Suess!", "Süß!"),
        ("Ich mag AEPFEL!! 😍", "Ich mag ÄPFEL!! 😍"),
        ("Wer mag Aepfel?!", "Wer mag Äpfel?!"),
        ("Was sind aepfel?", "Was sind aepfel?"),
        ("Oel ist ein wichtiger Bestandteil von Oel.", "Öl ist ein wichtiger Bestandteil von Öl."),
        ("WARUM SCHLIESSEN WIR NICHT AB?", "WARUM SCHLIEẞEN WIR NICHT AB?"),
        ("Wir schliessen nicht ab.", "Wir schließen nicht ab."),
        ("WiR sChLieSsEn ab!", "WiR sChLieẞEn ab!"),
        ("GRuEsse", "GRüße"),
        ("aEpfel", "aEpfel"),
        ("Abenteuer sind toll!", "Abenteuer sind toll!"),
        ("Koeffizient", "Koeffizient"),
        ("kongruent", "kongruent"),
        ("Dübel", "Dübel"),
        ("\0Kuebel", "\0Kübel"),
        ("\0Duebel\0", "\0Dübel\0"),
        ("🤩Duebel", "🤩Dübel"),
        ("🤩Duebel🤐", "🤩Dübel🤐"),
        ("Mauerduebelkuebel", "Mauerdübelkübel"),
        ("Gruesse aus der Strasse", "Grüße aus der Straße"),
        ("Wir muessen los", "Wir müssen los"),
        ("Der Schluessel", "Der Schlüssel"),
        ("Die Fuesse", "Die Füße"),
        ("Das Schloss am Fluss", "Das Schloss am Fluss"),
        ("Wasser, Quelle, Feuer", "Wasser, Quelle, Feuer"),
        ("", ""),
    ])
    def test_substitute(self, engine, text, expected):
        assert engine.substitute(text) == expected


class TestProperties:
    """Properties that hold for any input"""

    @pytest.mark.parametrize("text", [
        "Haus und Garten",
        "Das ist 1 Test: 2 + 2 = 4!",
        "مرحبا 你好 😎",
        "   \t\n  ",
        "???",
    ])
    def test_fallback_safety(self, engine, text):
        assert engine.substitute(text) == text

    @pytest.mark.parametrize("text", [
        "Ich mag Aepfel, aber nicht Aerger.",
        "Suess!",
        "WARUM SCHLIESSEN WIR NICHT AB?",
        "Mauerduebelkuebel",
        "Gruesse aus der Strasse",
    ])
    def test_idempotence(self, engine, text):
        once = engine.substitute(text)
        assert engine.substitute(once) == once

    @pytest.mark.parametrize("text", [
        "Ich mag AEPFEL",
        "Gruesse aus der Strasse",
        "WARUM SCHLIESSEN WIR",
    ])
    def test_only_digraph_spans_change(self, engine, text):
        result = engine.process(text)
        for word in result.words:
            if not word.changed:
                continue
            # Letters outside the replaced spans keep their case
            original, new = word.original, word.text
            i = j = 0
            while i < len(original):
                if original[i] == new[j]:
                    i += 1
                    j += 1
                else:
                    assert new[j] in "äöüÄÖÜßẞ"
                    i += 2
                    j += 1
            assert j == len(new)

    def test_non_word_passthrough(self, engine):
        text = "«Oel» – 3×Aepfel… 🍎🍏 (Aerger)!? 你好 Suess\n\t"
        expected = "«Öl» – 3×Äpfel… 🍎🍏 (Ärger)!? 你好 Süß\n\t"
        assert engine.substitute(text) == expected

    def test_length_never_grows(self, engine):
        text = "Gruesse, Suesses und Aepfel aus der Strasse"
        assert len(engine.substitute(text)) <= len(text)

    def test_too_many_replacements(self):
        engine = GermanEngine(EngineConfig(max_replacements=1))
        assert engine.substitute("Suess") == "Suess"
        assert engine.substitute("Aepfel") == "Äpfel"

    def test_concurrent_substitute(self, engine):
        texts = ["Ich mag Aepfel", "Suess!", "Mauerduebelkuebel", "Oel"] * 10
        expected = [engine.substitute(t) for t in texts]
        results = {}

        def worker(n):
            results[n] = [engine.substitute(t) for t in texts]

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        for n in range(4):
            assert results[n] == expected
