import json

import pytest

from plugins.graph_studio.cli import main


def _run(capsys, *argv):
    main(list(argv))
    return json.loads(capsys.readouterr().out)


def test_parse_command_prints_canonical_form(capsys):
    output = _run(capsys, "parse", "-x^2 + PI")
    assert output["canonical"] == "((-(x ^ 2)) + PI)"
    assert output["used_variables"] == ["x"]


def test_function_command(capsys):
    output = _run(capsys, "function", "1/x", "--x-min", "-1", "--x-max", "1", "--points", "2")
    assert output["points"] == 2
    assert output["domain"] == {"min": -1.0, "max": 1.0, "count": 2}


def test_surface_command_writes_null_for_gaps(capsys):
    output = _run(capsys, "surface", "sqrt(x)", "--x-min", "-1", "--x-max", "1", "--steps", "2", "--project")
    assert output["grid"]["z"][0] == [None, None, None]
    assert set(output["projection"]) == {"axes", "strips"}


def test_zeta_grid_command(capsys):
    output = _run(
        capsys, "zeta", "grid", "--re-min", "0.5", "--re-max", "1.5", "--im-min", "-1", "--im-max", "1", "--steps", "2"
    )
    assert output["mode"] == "zeta_grid"
    assert output["points"] == 8


def test_parse_error_exits_with_status_two(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["function", "foo(x)"])
    assert excinfo.value.code == 2
    assert "error:" in capsys.readouterr().err


def test_surface_command_lists_cells(capsys):
    output = _run(capsys, "surface", "x + 10*y", "--x-min", "0", "--x-max", "1", "--y-min", "0", "--y-max", "1", "--steps", "1", "--cells")
    assert output["cells"][1][0] == {"x": 1.0, "y": 0.0, "z": 1.0}
    assert output["cells"][0][1] == {"x": 0.0, "y": 1.0, "z": 10.0}
