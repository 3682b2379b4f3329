"""
Tests for note generation in summarized and raw mode.
"""

import logging

from release_note_generator.generator import ReleaseNoteGenerator, release_note_filename
from release_note_generator.models import DateRange, NoteResult, ReleaseRun, RepoRef
from release_note_generator.summarizer import ReleaseNoteSummarizer

from fakes import FakeOpenAI

RANGE = DateRange("2024-02-01", "2024-02-29")


def make_run(logs):
    repos = [RepoRef.from_url(f"https://example.com/org/{name}.git") for name in logs]
    return ReleaseRun(date_range=RANGE, repos=repos, logs=dict(logs))


def make_summarizer(replies):
    client = FakeOpenAI(replies)
    return ReleaseNoteSummarizer(client, "gpt-3.5-turbo", system_prompt="SYSTEM"), client


def test_release_note_filename():
    assert release_note_filename("alpha", RANGE) == "alpha_2024-02-01_2024-02-29.md"


class TestSummarizedMode:
    """Notes are requested per repository and written to disk."""

    def test_writes_one_file_per_repository(self, tmp_path, capsys):
        summarizer, client = make_summarizer(["note alpha", "note beta"])
        generator = ReleaseNoteGenerator(str(tmp_path), summarizer)

        results = generator.generate(make_run({"alpha": "commit a\n", "beta": "commit b\n"}))

        assert [r.state for r in results] == [NoteResult.SAVED, NoteResult.SAVED]
        assert (tmp_path / "alpha_2024-02-01_2024-02-29.md").read_text(encoding="utf-8") == "note alpha"
        assert (tmp_path / "beta_2024-02-01_2024-02-29.md").read_text(encoding="utf-8") == "note beta"
        assert len(client.requests) == 2
        assert "note alpha" in capsys.readouterr().out

    def test_empty_log_makes_no_request_and_no_file(self, tmp_path, caplog):
        summarizer, client = make_summarizer(["note beta"])
        generator = ReleaseNoteGenerator(str(tmp_path), summarizer)

        with caplog.at_level(logging.WARNING):
            results = generator.generate(make_run({"alpha": "", "beta": "commit b\n"}))

        assert results[0].state == NoteResult.SKIPPED
        assert results[1].state == NoteResult.SAVED
        assert len(client.requests) == 1
        assert "beta" in client.requests[0]["messages"][1]["content"]
        assert sorted(p.name for p in tmp_path.iterdir()) == ["beta_2024-02-01_2024-02-29.md"]
        assert "alpha" in caplog.text

    def test_failure_does_not_stop_later_repositories(self, tmp_path, caplog):
        summarizer, client = make_summarizer([ConnectionError("network down"), "note beta"])
        generator = ReleaseNoteGenerator(str(tmp_path), summarizer)

        with caplog.at_level(logging.ERROR):
            results = generator.generate(make_run({"alpha": "commit a\n", "beta": "commit b\n"}))

        assert results[0].state == NoteResult.FAILED
        assert "network down" in results[0].error
        assert results[1].state == NoteResult.SAVED
        assert not (tmp_path / "alpha_2024-02-01_2024-02-29.md").exists()
        assert (tmp_path / "beta_2024-02-01_2024-02-29.md").exists()
        assert "network down" in caplog.text

    def test_unwritable_note_does_not_stop_later_repositories(self, tmp_path, caplog):
        # a directory in place of the note file makes the write fail
        (tmp_path / "alpha_2024-02-01_2024-02-29.md").mkdir()
        summarizer, client = make_summarizer(["note alpha", "note beta"])
        generator = ReleaseNoteGenerator(str(tmp_path), summarizer)

        with caplog.at_level(logging.ERROR):
            results = generator.generate(make_run({"alpha": "commit a\n", "beta": "commit b\n"}))

        assert [r.state for r in results] == [NoteResult.FAILED, NoteResult.SAVED]
        assert (tmp_path / "beta_2024-02-01_2024-02-29.md").read_text(encoding="utf-8") == "note beta"
        assert len(client.requests) == 2
        assert "alpha" in caplog.text

    def test_empty_response_writes_nothing_and_keeps_earlier_note(self, tmp_path):
        earlier = tmp_path / "alpha_2024-02-01_2024-02-29.md"
        earlier.write_text("earlier note", encoding="utf-8")
        summarizer, _ = make_summarizer([None, "note beta"])
        generator = ReleaseNoteGenerator(str(tmp_path), summarizer)

        results = generator.generate(make_run({"alpha": "commit a\n", "beta": "commit b\n"}))

        assert results[0].state == NoteResult.FAILED
        assert results[0].path is None
        assert earlier.read_text(encoding="utf-8") == "earlier note"
        assert results[1].state == NoteResult.SAVED

    def test_rerun_overwrites_existing_note(self, tmp_path):
        run = make_run({"alpha": "commit a\n"})
        first, _ = make_summarizer(["first version"])
        ReleaseNoteGenerator(str(tmp_path), first).generate(run)
        second, _ = make_summarizer(["second version"])
        ReleaseNoteGenerator(str(tmp_path), second).generate(run)

        files = list(tmp_path.iterdir())
        assert len(files) == 1
        assert files[0].read_text(encoding="utf-8") == "second version"

    def test_creates_output_directory(self, tmp_path):
        out_dir = tmp_path / "release_notes"
        summarizer, _ = make_summarizer(["note"])
        results = ReleaseNoteGenerator(str(out_dir), summarizer).generate(make_run({"alpha": "commit a\n"}))
        assert results[0].path == str(out_dir / "alpha_2024-02-01_2024-02-29.md")
        assert out_dir.is_dir()


class TestRawMode:
    """Without a summarizer the raw logs are printed."""

    def test_prints_logs_and_writes_nothing(self, tmp_path, capsys):
        generator = ReleaseNoteGenerator(str(tmp_path))

        results = generator.generate(make_run({"alpha": "commit a\n", "beta": "commit b\n"}))

        out = capsys.readouterr().out
        assert [r.state for r in results] == [NoteResult.PRINTED, NoteResult.PRINTED]
        assert out.index("alpha") < out.index("commit a") < out.index("beta") < out.index("commit b")
        assert list(tmp_path.iterdir()) == []

    def test_empty_log_is_skipped(self, tmp_path, capsys):
        generator = ReleaseNoteGenerator(str(tmp_path))

        results = generator.generate(make_run({"alpha": "", "beta": "commit b\n"}))

        out = capsys.readouterr().out
        assert results[0].state == NoteResult.SKIPPED
        assert "alpha" not in out
        assert "commit b" in out
