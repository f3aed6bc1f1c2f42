"""Tests for the mdtag CLI."""

import sys

import pytest
import respx
from httpx import Response

from mdtag.cli.main import create_parser, main

from tests.fakes.http import CLAUDE_URL, OPENAI_URL, make_claude_response, make_openai_response


@pytest.fixture
def no_credentials(monkeypatch):
    """Remove provider settings from the environment."""
    for name in [
        "ANTHROPIC_API_KEY",
        "OPENAI_API_KEY",
        "MDTAG_PROVIDER",
        "MDTAG_TAG_PREFIX",
        "MDTAG_CLAUDE_MODEL",
        "MDTAG_OPENAI_MODEL",
    ]:
        monkeypatch.delenv(name, raising=False)


def run_main(monkeypatch, *argv: str) -> int:
    """Run main with argv and return the exit code."""
    monkeypatch.setattr(sys, "argv", ["mdtag", *argv])
    with pytest.raises(SystemExit) as exc_info:
        main()
    return exc_info.value.code


class TestParser:
    """Tests for create_parser."""

    def test_file_command(self):
        """file takes a path and common options."""
        args = create_parser().parse_args(
            ["-v", "file", "note.md", "--root", "/vault", "--provider", "openai", "--prefix", "ai/"]
        )

        assert args.verbose
        assert args.command == "file"
        assert args.path == "note.md"
        assert args.root == "/vault"
        assert args.provider == "openai"
        assert args.prefix == "ai/"

    def test_rejects_unknown_provider(self):
        """Only supported providers are accepted."""
        with pytest.raises(SystemExit):
            create_parser().parse_args(["all", "--provider", "gemini"])

    def test_root_defaults_to_cwd(self):
        """--root defaults to the current directory."""
        assert create_parser().parse_args(["vocab"]).root == "."


class TestMain:
    """Tests for main."""

    def test_no_command_prints_help(self, monkeypatch, capsys):
        """Without a command the help is shown."""
        assert run_main(monkeypatch) == 0
        assert "usage: mdtag" in capsys.readouterr().out

    def test_vocab(self, monkeypatch, capsys, vault):
        """vocab lists the vault's tags."""
        assert run_main(monkeypatch, "vocab", "--root", str(vault), "--sort", "--count") == 0
        assert capsys.readouterr().out == "machine-learning\npython\n\n2 tags\n"

    def test_missing_root(self, monkeypatch, capsys, tmp_path):
        """A missing vault root is an error."""
        assert run_main(monkeypatch, "vocab", "--root", str(tmp_path / "nope")) == 1
        assert "Error: Vault root is not a directory" in capsys.readouterr().err

    def test_file_without_credentials(self, monkeypatch, capsys, vault, no_credentials):
        """Tagging without any API key fails with a configuration error."""
        code = run_main(monkeypatch, "file", str(vault / "plain.md"), "--root", str(vault))

        assert code == 1
        assert "Error: No LLM provider configured" in capsys.readouterr().err

    def test_file_outside_vault(self, monkeypatch, capsys, vault, tmp_path, no_credentials):
        """A path outside the vault is rejected."""
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-test")
        outside = tmp_path / "outside.md"
        outside.write_text("x")

        assert run_main(monkeypatch, "file", str(outside), "--root", str(vault)) == 1
        assert "is not inside the vault" in capsys.readouterr().err

    @respx.mock
    def test_file_tags_note(self, monkeypatch, capsys, vault, no_credentials):
        """file tags one note through the configured provider."""
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-test")
        respx.post(CLAUDE_URL).mock(
            return_value=Response(200, json=make_claude_response('["Python", "asyncio"]'))
        )

        code = run_main(monkeypatch, "file", str(vault / "plain.md"), "--root", str(vault))

        assert code == 0
        assert capsys.readouterr().out == "Tagged plain.md: python, asyncio\n"
        assert (vault / "plain.md").read_text() == (
            "---\ntags:\n  - python\n  - asyncio\n---\n\nNotes about #python and asyncio.\n"
        )

    @respx.mock
    def test_file_uses_fallback(self, monkeypatch, capsys, vault, no_credentials):
        """A failing primary falls back to the other provider."""
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-test")
        monkeypatch.setenv("OPENAI_API_KEY", "sk-openai-test")
        respx.post(CLAUDE_URL).mock(return_value=Response(529, text="overloaded"))
        respx.post(OPENAI_URL).mock(
            return_value=Response(200, json=make_openai_response('["python"]'))
        )

        code = run_main(monkeypatch, "file", str(vault / "plain.md"), "--root", str(vault))

        assert code == 0
        assert capsys.readouterr().out == "Tagged plain.md via OpenAI: python\n"

    @respx.mock
    def test_all_with_prefix(self, monkeypatch, capsys, vault, no_credentials):
        """all tags every note and prints the summary."""
        monkeypatch.setenv("OPENAI_API_KEY", "sk-openai-test")
        respx.post(OPENAI_URL).mock(
            return_value=Response(200, json=make_openai_response('["notes"]'))
        )
        code = run_main(
            monkeypatch, "all", "--root", str(vault), "--provider", "openai", "--prefix", "p/"
        )

        assert code == 0
        assert "Completed. Processed 2/2 files." in capsys.readouterr().out
        assert (vault / "projects" / "alpha.md").read_text().startswith(
            "---\ntitle: Alpha\ntags: [p/notes]\n---"
        )
