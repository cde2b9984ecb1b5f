from __future__ import annotations

import pytest

import app


def _run(capsys, argv: list[str]) -> str:
    app.main(["--no-banner", *argv])
    return capsys.readouterr().out


def test_link_command(capsys) -> None:
    out = _run(capsys, ["link", "--stream", "48", "--topic", "mobile dev", "--near", "5"])
    assert out == "https://chat.example.com/#narrow/stream/48-mobile/topic/mobile.20dev/near/5"


def test_link_command_dm(capsys) -> None:
    out = _run(capsys, ["link", "--dm", "7,5,6"])
    assert out == "https://chat.example.com/#narrow/dm/5,6,7-group"


def test_link_command_negated_topic(capsys) -> None:
    out = _run(capsys, ["link", "--stream", "6", "--not-topic", "noise"])
    assert out == "https://chat.example.com/#narrow/stream/6-frontend/-topic/noise"


def test_quote_placeholder_command(capsys) -> None:
    out = _run(capsys, ["quote", "1588273"])
    assert out == (
        "@_**Iago|5** [said](https://chat.example.com/#narrow/stream/6-frontend"
        "/topic/quote-and-reply.20fence.20length/near/1588273): *(loading message 1588273)*\n"
    )


def test_quote_command_with_content(capsys, tmp_path) -> None:
    content = tmp_path / "content.md"
    content.write_text("```\ncode\n```\n", encoding="utf-8")
    out = _run(capsys, ["quote", "1600000", "--content-file", str(content)])
    assert out == (
        "@_**Chris Bobbe|13313** [said](https://chat.example.com/#narrow/dm/1,13313-dm"
        "/near/1600000):\n````quote\n```\ncode\n```\n````\n"
    )


def test_mention_command_disambiguates(capsys) -> None:
    assert _run(capsys, ["mention", "13313"]) == "@**Chris Bobbe**"
    assert _run(capsys, ["mention", "20", "--silent"]) == "@_**Sam|20**"


def test_unknown_message_exits_nonzero(capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        app.main(["--no-banner", "quote", "404"])
    assert excinfo.value.code == 1


def test_build_narrow_order() -> None:
    args = app.build_parser().parse_args(["link", "--id", "9", "--stream", "48", "--dm", "2,1"])
    narrow = app.build_narrow(args)
    assert [element.operand for element in narrow] == [48, (1, 2), 9]


def test_missing_realm_url_exits_nonzero(monkeypatch) -> None:
    monkeypatch.setattr(app.settings, "REALM_URL", None)
    with pytest.raises(SystemExit) as excinfo:
        app.main(["--no-banner", "link", "--stream", "48"])
    assert excinfo.value.code == 1


def test_quote_output_is_written_verbatim(capsys, tmp_path) -> None:
    content = tmp_path / "content.md"
    content.write_text("col1\tcol2 [x] :smile:", encoding="utf-8")
    out = _run(capsys, ["quote", "1588273", "--content-file", str(content)])
    assert out.endswith("\n```quote\ncol1\tcol2 [x] :smile:\n```\n")


def test_file_handler_resolves_relative_path(monkeypatch, tmp_path) -> None:
    monkeypatch.setattr(app.settings, "PROJECT_ROOT", str(tmp_path))
    handler = app._file_handler({"path": "logs/zcompose.log", "max_bytes": 1024, "backup_count": 2})
    try:
        assert handler.baseFilename == str(tmp_path / "logs" / "zcompose.log")
        assert handler.maxBytes == 1024
        assert handler.backupCount == 2
    finally:
        handler.close()


def test_log_handlers_follow_config(monkeypatch, tmp_path) -> None:
    monkeypatch.setattr(app.settings, "PROJECT_ROOT", str(tmp_path))
    handlers = app._log_handlers({"console": False, "file": {"enabled": True}})
    try:
        assert len(handlers) == 1
        assert (tmp_path / "logs").is_dir()
    finally:
        for handler in handlers:
            handler.close()
    assert app._log_handlers({"console": False}) == []
