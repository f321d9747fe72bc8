"""Tests for meetsched.prompt: the terminal choice prompt."""

from __future__ import annotations

import asyncio
import io

from rich.console import Console

from meetsched.prompt import ConsoleChoicePrompt, alert_no_accounts


def _prompt() -> tuple[ConsoleChoicePrompt, io.StringIO]:
    out = io.StringIO()
    return ConsoleChoicePrompt(Console(file=out, width=120)), out


def _patch_ask(monkeypatch, answer=None, exc=None):
    def fake_ask(*args, **kwargs):
        if exc is not None:
            raise exc
        return answer

    monkeypatch.setattr("meetsched.prompt.IntPrompt.ask", fake_ask)


def test_pick_returns_zero_based_index(monkeypatch):
    _patch_ask(monkeypatch, answer=2)
    prompt, out = _prompt()
    assert asyncio.run(prompt.present_choices(["a@x.com", "b@y.com"])) == 1
    assert "b@y.com" in out.getvalue()


def test_zero_cancels(monkeypatch):
    _patch_ask(monkeypatch, answer=0)
    prompt, _ = _prompt()
    assert asyncio.run(prompt.present_choices(["a@x.com", "b@y.com"])) is None


def test_eof_cancels(monkeypatch):
    _patch_ask(monkeypatch, exc=EOFError())
    prompt, _ = _prompt()
    assert asyncio.run(prompt.present_choices(["a@x.com", "b@y.com"])) is None


def test_ctrl_c_cancels(monkeypatch):
    _patch_ask(monkeypatch, exc=KeyboardInterrupt())
    prompt, _ = _prompt()
    assert asyncio.run(prompt.present_choices(["a@x.com", "b@y.com"])) is None


def test_alert_no_accounts():
    out = io.StringIO()
    alert_no_accounts(Console(file=out, width=120))
    assert "No account found" in out.getvalue()
    assert "add-account" in out.getvalue()
