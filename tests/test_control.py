from escposlink.application.control import process_client_command


def _callback_log():
    calls: list[str] = []

    def on_status() -> str:
        calls.append("status")
        return '{"connection": true}'

    def on_poll() -> None:
        calls.append("poll")

    def on_asb(enabled: bool) -> None:
        calls.append(f"asb:{enabled}")

    return calls, on_status, on_poll, on_asb


def test_status_poll_and_quit() -> None:
    calls, on_status, on_poll, on_asb = _callback_log()

    assert (
        process_client_command("status", on_status, on_poll, on_asb)
        == 'OK {"connection": true}\n\n'
    )
    assert (
        process_client_command(" POLL \n", on_status, on_poll, on_asb)
        == "OK status requested\n\n"
    )
    assert process_client_command("quit", on_status, on_poll, on_asb) is None
    assert calls == ["status", "poll"]


def test_automatic_status_back_toggle() -> None:
    calls, on_status, on_poll, on_asb = _callback_log()

    assert (
        process_client_command("asb-on", on_status, on_poll, on_asb)
        == "OK automatic status back enabled\n\n"
    )
    assert (
        process_client_command("asb-off", on_status, on_poll, on_asb)
        == "OK automatic status back disabled\n\n"
    )
    assert calls == ["asb:True", "asb:False"]


def test_unknown_and_empty() -> None:
    calls, on_status, on_poll, on_asb = _callback_log()

    assert process_client_command("", on_status, on_poll, on_asb) == "OK\n\n"
    assert process_client_command(None, on_status, on_poll, on_asb) == "OK\n\n"  # type: ignore[arg-type]
    assert (
        process_client_command("nada", on_status, on_poll, on_asb)
        == "ERROR unrecognized command (nada)\n\n"
    )
    assert calls == []
