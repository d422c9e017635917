# tests/test_bank.py
"""
Tests for QuestionBank merging, topics and cache refresh
"""
from bank import QuestionBank
from config import ALL_TOPICS, CORRECT_MARKER as M, DEFAULT_TOPIC

PILLARS = f"""1) What is the first pillar of Islam?
Salah
Zakat
Shahada {M}
Sawm
"""

PROPHETS = f"""1) Which Prophet was swallowed by a whale?
Prophet Isa
Prophet Musa
Prophet Yunus {M}
Prophet Yusuf
2) WHAT IS THE FIRST PILLAR OF ISLAM?
Salah
Zakat
SHAHADA {M}
Sawm
"""


class TestQuestionBank:

    def test_add_text_and_names(self):
        bank = QuestionBank()
        qs = bank.add_text("pillars", PILLARS)
        assert len(qs) == 1
        assert bank.names() == ["pillars"]
        assert bank.get_by_name("pillars")[0].topic == DEFAULT_TOPIC

    def test_unknown_bank(self):
        assert QuestionBank().get_by_name("nope") == []

    def test_get_by_name_returns_copy(self):
        bank = QuestionBank()
        bank.add_text("pillars", PILLARS)
        bank.get_by_name("pillars").clear()
        assert len(bank.get_by_name("pillars")) == 1

    def test_get_all_dedupes_case_insensitive(self):
        bank = QuestionBank()
        bank.add_text("pillars", PILLARS)
        bank.add_text("prophets", PROPHETS, topic="Prophets in Islam")
        merged = bank.get_all()
        assert [q.question for q in merged] == [
            "What is the first pillar of Islam?",
            "Which Prophet was swallowed by a whale?",
        ]

    def test_topics_and_filter(self):
        bank = QuestionBank()
        bank.add_text("pillars", PILLARS)
        bank.add_text("prophets", PROPHETS, topic="Prophets in Islam")
        assert bank.topics() == [ALL_TOPICS, DEFAULT_TOPIC, "Prophets in Islam"]
        assert len(bank.get_by_topic(ALL_TOPICS)) == 2
        assert [q.answer for q in bank.get_by_topic("Prophets in Islam")] == ["Prophet Yunus"]
        assert bank.get_by_topic("Fiqh") == []

    def test_remove_bank(self):
        bank = QuestionBank()
        bank.add_text("pillars", PILLARS)
        bank.remove_bank("pillars")
        bank.remove_bank("pillars")
        assert bank.names() == []
        assert bank.topics() == [ALL_TOPICS]

    def test_file_bank_reloads_when_stale(self, tmp_path):
        path = tmp_path / "pillars.txt"
        path.write_text(PILLARS, encoding="utf-8")
        bank = QuestionBank(cache_seconds=0)
        bank.add_bank("pillars", path)

        path.write_text(PILLARS + PROPHETS, encoding="utf-8")
        assert len(bank.get_by_name("pillars")) == 3

    def test_file_bank_cached_until_refresh(self, tmp_path):
        path = tmp_path / "pillars.txt"
        path.write_text(PILLARS, encoding="utf-8")
        bank = QuestionBank(cache_seconds=3600)
        bank.add_bank("pillars", path, topic="Pillars")

        path.write_text(PILLARS + PROPHETS, encoding="utf-8")
        assert len(bank.get_by_name("pillars")) == 1

        bank.refresh()
        qs = bank.get_by_name("pillars")
        assert len(qs) == 3
        assert all(q.topic == "Pillars" for q in qs)

    def test_clear_cache(self, tmp_path):
        path = tmp_path / "pillars.txt"
        path.write_text(PILLARS, encoding="utf-8")
        bank = QuestionBank(cache_seconds=3600)
        bank.add_bank("pillars", path)

        path.write_text(PROPHETS, encoding="utf-8")
        bank.clear_cache()
        assert [q.answer for q in bank.get_by_name("pillars")] == ["Prophet Yunus", "SHAHADA"]

    def test_text_bank_never_stale(self):
        bank = QuestionBank(cache_seconds=0)
        bank.add_text("pillars", PILLARS)
        bank.clear_cache()
        assert len(bank.get_by_name("pillars")) == 1

    def test_missing_file_keeps_last_parse(self, tmp_path):
        path = tmp_path / "pillars.txt"
        path.write_text(PILLARS, encoding="utf-8")
        bank = QuestionBank(cache_seconds=0)
        bank.add_bank("pillars", path)
        bank.add_text("inline", PROPHETS, topic="Prophets in Islam")

        path.unlink()
        assert [q.answer for q in bank.get_all()] == ["Shahada", "Prophet Yunus"]
        assert [q.answer for q in bank.get_by_name("pillars")] == ["Shahada"]
        assert bank.topics() == [ALL_TOPICS, DEFAULT_TOPIC, "Prophets in Islam"]

    def test_topics_for_one_bank_in_first_seen_order(self):
        bank = QuestionBank()
        bank.add_text("zeta", PILLARS, topic="Zeta")
        bank.add_text("alpha", PROPHETS, topic="Alpha")
        assert bank.topics("alpha") == [ALL_TOPICS, "Alpha"]
        assert bank.topics() == [ALL_TOPICS, "Zeta", "Alpha"]
        assert bank.topics("nope") == [ALL_TOPICS]
