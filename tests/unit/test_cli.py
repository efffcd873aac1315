import argparse
import builtins
import json

import pytest

from alphametic.tools.solve_tool import main, demo_puzzles


def test_solve(capsys):
    assert main(["solve", "SEND", "MORE", "MONEY"]) == 0
    out = capsys.readouterr().out
    assert "\tTASK     : SEND + MORE = MONEY\n" in out
    assert "\tSOLUTION : true\n" in out
    assert "\tRESULT   : 9567 + 1085 = 10652\n" in out


def test_solve_not_found(capsys):
    assert main(["solve", "APPLE", "LEMON", "BANANAX"]) == 1
    out = capsys.readouterr().out
    assert "\tSOLUTION : false\n" in out
    assert "\tRESULT   : -\n" in out


@pytest.mark.parametrize("args", [
    ["solve", "", "ABC", "DEF"],
    ["solve", "AB1", "ABC", "DEF"],
    ["equation", "SEND - MORE = MONEY"],
])
def test_invalid_input(capsys, args):
    assert main(args) == 2
    assert "TASK" not in capsys.readouterr().out


def test_no_command(capsys):
    assert main([]) == 2
    assert "usage:" in capsys.readouterr().out


def test_equation_json(capsys):
    assert main(["equation", "send + more = money", "-j", "-s"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert len(data) == 1
    entry = data[0]
    assert entry['task'] == ["SEND", "MORE", "MONEY"]
    assert entry['solution'] is True
    assert entry['result'] == [9567, 1085, 10652]
    assert entry['assignment']['M'] == 1
    assert entry['stats']['trials_count'] > 0
    assert entry['stats']['solver_state'] == "DONE"


def test_node_limit_json(capsys):
    assert main(["solve", "SEND", "MORE", "MONEY", "--json", "--node-limit", "0"]) == 1
    data = json.loads(capsys.readouterr().out)
    assert data[0]['solution'] is False
    assert data[0]['state'] == "INTERRUPT_LIMIT"


def test_show_model_and_stats(capsys):
    assert main(["solve", "TO", "GO", "OUT", "-m", "-s", "--select-var", "in_order",
                 "--select-value", "max_value", "--all-different", "matching"]) == 0
    out = capsys.readouterr().out
    assert "=== model variables: ===" in out
    assert "TO + GO == OUT" in out
    assert "Found solution in" in out


def test_output_file(tmp_path, capsys):
    output_filename = tmp_path / "out.txt"
    assert main(["solve", "SEND", "MORE", "MONEY", "-o", str(output_filename)]) == 0
    assert capsys.readouterr().out == ""
    with open(str(output_filename), "r") as output_file:
        assert "9567 + 1085 = 10652" in output_file.read()


def test_demo(capsys):
    assert main(["demo"]) == 0
    out = capsys.readouterr().out
    assert out.count("\tTASK     : ") == len(demo_puzzles())
    assert "\tTASK     : APPLE + LEMON = BANANAX\n" in out
    assert "negative test case:" in out


def test_timeout_json(capsys):
    assert main(["solve", "SEND", "MORE", "MONEY", "-j", "-s", "-t", "0"]) == 1
    data = json.loads(capsys.readouterr().out)
    assert data[0]['solution'] is False
    assert data[0]['state'] == "INTERRUPT_TIMEOUT"
    assert data[0]['stats']['solver_state'] == "INTERRUPT_TIMEOUT"


@pytest.mark.parametrize("words, exit_code", [
    (["SEND", "MORE", "MONEY"], 0),
    (["", "MORE", "MONEY"], 2),
])
def test_output_file_closed(tmp_path, monkeypatch, words, exit_code):
    opened_files = []

    def recording_open(*args, **kwargs):
        opened_file = builtins.open(*args, **kwargs)
        opened_files.append(opened_file)
        return opened_file

    monkeypatch.setattr(argparse, "open", recording_open, raising=False)
    output_filename = tmp_path / "out.txt"
    assert main(["solve"] + words + ["-o", str(output_filename)]) == exit_code
    assert len(opened_files) == 1
    assert opened_files[0].closed
