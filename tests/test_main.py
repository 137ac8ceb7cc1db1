import pytest

from app.__main__ import DEFAULT_PORT, _resolve_port, build_parser


def test_port_defaults_when_unset():
    assert _resolve_port(None) == DEFAULT_PORT
    assert _resolve_port("8080") == 8080


@pytest.mark.parametrize("value", ["http", "0", "70000"])
def test_bad_port_exits(value):
    with pytest.raises(SystemExit):
        _resolve_port(value)


def test_parser_reads_port_from_environment(monkeypatch):
    monkeypatch.setenv("GRAPH_STUDIO_PORT", "6123")
    monkeypatch.setenv("GRAPH_STUDIO_HOST", "0.0.0.0")
    args = build_parser().parse_args([])
    assert _resolve_port(args.port) == 6123
    assert args.host == "0.0.0.0"
    assert args.debug is False
