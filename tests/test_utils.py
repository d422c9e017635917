# tests/test_utils.py
"""
Tests for JSON persistence of questions
"""
import json

from block_parser import parse
from config import CORRECT_MARKER as M
from models import Question
from utils import load_questions, save_questions


class TestPersistence:

    def test_save_then_load(self, tmp_path):
        qs = parse(f"1) Which angel delivered the revelation?\nMichael\nGabriel (Jibril) {M}\nIsrafil\nAzrael\n")
        path = tmp_path / "wrong.json"
        save_questions(str(path), qs)

        raw = json.loads(path.read_text(encoding="utf-8"))
        assert raw[0]["answer"] == "Gabriel (Jibril)"
        assert set(raw[0]) == {"question", "options", "answer", "topic", "explanation", "id"}
        assert load_questions(str(path)) == qs

    def test_non_ascii_kept(self, tmp_path):
        path = tmp_path / "wrong.json"
        save_questions(str(path), [Question("Qu'est-ce que « Zakat » ?", ["a", "b", "c", "d"], "a")])
        assert "«" in path.read_text(encoding="utf-8")

    def test_load_ignores_unknown_keys(self, tmp_path):
        path = tmp_path / "old.json"
        path.write_text(json.dumps([{
            "question": "Q", "options": ["A", "B", "C", "D"], "answer": "B",
            "explanation": "", "content": "legacy field",
        }]), encoding="utf-8")
        q = load_questions(str(path))[0]
        assert q.answer == "B"
        assert q.topic == ""


class TestQuestion:

    def test_is_correct(self):
        q = Question("Q", ["A", "B", "C", "D"], "B")
        assert q.is_correct("B")
        assert q.is_correct(" B ")
        assert not q.is_correct("A")
