"""CLI tests for the jsish entry point.

Test cases live in 01_cli/*.tests files. Format:

    === test name
    args: --emit -
    JSON program here
    (stdin for the CLI)
    ---
    exit: 0
    stdout: exact stdout as a JSON string
    stderr: exact stderr content (trailing newline stripped)
    stderr-contains: substring
    stdout-contains: substring
    stderr-empty: true
    stdout-empty: true
    ---
"""

import io
import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

CLI_DIR = Path(__file__).parent / "01_cli"
SRC_DIR = Path(__file__).parent.parent / "src"


def parse_cli_test_file(path: Path) -> list[tuple[str, dict]]:
    """Parse a .tests file into (name, spec) tuples."""
    lines = path.read_text().split("\n")
    result: list[tuple[str, dict]] = []
    i = 0
    while i < len(lines):
        line = lines[i]
        if line.startswith("=== "):
            test_name = line[4:].strip()
            i += 1
            input_lines: list[str] = []
            while i < len(lines) and not lines[i].startswith("---"):
                input_lines.append(lines[i])
                i += 1
            if i < len(lines) and lines[i] == "---":
                i += 1
            expected_lines: list[str] = []
            while i < len(lines) and not lines[i].startswith("---"):
                expected_lines.append(lines[i])
                i += 1
            if i < len(lines) and lines[i] == "---":
                i += 1
            result.append((test_name, _parse_spec(input_lines, expected_lines)))
        else:
            i += 1
    return result


def _parse_spec(input_lines: list[str], expected_lines: list[str]) -> dict:
    spec: dict = {"args": [], "stdin": "", "assertions": []}
    body_start = 0
    if input_lines and input_lines[0].startswith("args:"):
        args_str = input_lines[0][5:].strip()
        spec["args"] = args_str.split() if args_str else []
        body_start = 1
    spec["stdin"] = "\n".join(input_lines[body_start:])

    for line in expected_lines:
        line = line.strip()
        if not line:
            continue
        if line.startswith("exit:"):
            spec["assertions"].append(("exit", int(line[5:].strip())))
        elif line.startswith("stdout-contains:"):
            spec["assertions"].append(("stdout-contains", line[16:].strip()))
        elif line.startswith("stdout-empty:"):
            spec["assertions"].append(("stdout-empty", None))
        elif line.startswith("stdout:"):
            spec["assertions"].append(("stdout", json.loads(line[7:].strip())))
        elif line.startswith("stderr-contains:"):
            spec["assertions"].append(("stderr-contains", line[16:].strip()))
        elif line.startswith("stderr-empty:"):
            spec["assertions"].append(("stderr-empty", None))
        elif line.startswith("stderr:"):
            spec["assertions"].append(("stderr", line[7:].strip()))
    return spec


def discover_cli_tests() -> list[tuple[str, dict]]:
    results = []
    for test_file in sorted(CLI_DIR.glob("*.tests")):
        for name, spec in parse_cli_test_file(test_file):
            results.append((f"{test_file.stem}/{name}", spec))
    return results


def run_cli(spec: dict) -> subprocess.CompletedProcess[bytes]:
    """Run the jsish CLI from a test spec."""
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(
        p for p in (str(SRC_DIR), env.get("PYTHONPATH", "")) if p
    )
    return subprocess.run(
        [sys.executable, "-m", "jsish", *spec["args"]],
        input=spec["stdin"].encode(),
        capture_output=True,
        env=env,
    )


def check_assertions(
    result: subprocess.CompletedProcess[bytes], assertions: list[tuple]
) -> None:
    stdout = result.stdout.decode(errors="replace")
    stderr = result.stderr.decode(errors="replace")
    for kind, value in assertions:
        if kind == "exit":
            assert result.returncode == value, (
                f"expected exit {value}, got {result.returncode}\nstderr: {stderr}"
            )
        elif kind == "stdout":
            assert stdout == value, f"expected stdout {value!r}, got {stdout!r}"
        elif kind == "stdout-contains":
            assert value in stdout, f"expected stdout to contain {value!r}, got {stdout!r}"
        elif kind == "stdout-empty":
            assert stdout == "", f"expected empty stdout, got {stdout[:200]!r}"
        elif kind == "stderr":
            actual = stderr.rstrip("\n")
            assert actual == value, f"expected stderr {value!r}, got {actual!r}"
        elif kind == "stderr-contains":
            assert value in stderr, f"expected stderr to contain {value!r}, got {stderr!r}"
        elif kind == "stderr-empty":
            assert stderr == "", f"expected empty stderr, got {stderr!r}"


def pytest_generate_tests(metafunc):
    if "cli_spec" in metafunc.fixturenames:
        tests = discover_cli_tests()
        params = [pytest.param(spec, id=test_id) for test_id, spec in tests]
        metafunc.parametrize("cli_spec", params)


def test_cli(cli_spec: dict) -> None:
    result = run_cli(cli_spec)
    check_assertions(result, cli_spec["assertions"])


def test_cli_reads_file(tmp_path: Path) -> None:
    path = tmp_path / "prog.json"
    path.write_text(
        '{"_type": "Program", "elements": ['
        '{"_type": "PrintStmt", "expr": {"_type": "StringLit", "value": "hi"}}]}'
    )
    result = run_cli({"args": [str(path)], "stdin": ""})
    assert result.returncode == 0
    assert result.stdout == b"hi"


def test_cli_in_process(capsys) -> None:
    from jsish.cli import main

    assert main(["--help"]) == 0
    assert "jsish [OPTIONS] FILE" in capsys.readouterr().out
    assert main([]) == 2
    assert capsys.readouterr().err == "jsish: missing file argument\n"


def _sum_chain(depth: int) -> str:
    """JSON for a left-nested `1 + 1 + ... + 1` with `depth` additions."""
    expr = {"_type": "NumLit", "value": 1}
    for _ in range(depth):
        expr = {
            "_type": "BinaryOp",
            "op": "+",
            "left": expr,
            "right": {"_type": "NumLit", "value": 1},
        }
    program = {"_type": "Program", "elements": [{"_type": "PrintStmt", "expr": expr}]}
    return json.dumps(program)


def test_cli_runs_deeply_nested_program() -> None:
    result = run_cli({"args": ["-"], "stdin": _sum_chain(600)})
    assert result.stderr == b""
    assert result.returncode == 0
    assert result.stdout == b"601"


def test_cli_emits_deeply_nested_program() -> None:
    result = run_cli({"args": ["--emit", "-"], "stdin": _sum_chain(600)})
    assert result.returncode == 0
    assert result.stdout.startswith(b"print " + b"(" * 600 + b"1 + 1)")


class _BrokenStream(io.StringIO):
    def write(self, s):
        raise BrokenPipeError("pipe closed")


def test_cli_reports_stdout_write_failure(tmp_path: Path, monkeypatch, capsys) -> None:
    from jsish.cli import main

    path = tmp_path / "prog.json"
    path.write_text(_sum_chain(1))
    capsys.readouterr()
    monkeypatch.setattr(sys, "stdout", _BrokenStream())
    assert main([str(path)]) == 1
    assert capsys.readouterr().err == "jsish: io error: pipe closed\n"


@pytest.mark.skipif(not os.path.exists("/dev/full"), reason="needs /dev/full")
def test_cli_reports_full_device() -> None:
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(
        p for p in (str(SRC_DIR), env.get("PYTHONPATH", "")) if p
    )
    with open("/dev/full", "wb") as full:
        result = subprocess.run(
            [sys.executable, "-m", "jsish", "-"],
            input=_sum_chain(1).encode(),
            stdout=full,
            stderr=subprocess.PIPE,
            env=env,
        )
    assert result.returncode == 1
    stderr = result.stderr.decode()
    assert stderr.startswith("jsish: io error: ")
    assert "Traceback" not in stderr


def test_cli_reports_nesting_overflow(tmp_path: Path, monkeypatch, capsys) -> None:
    import jsish.cli

    def too_deep(program, out=None):
        raise RecursionError("maximum recursion depth exceeded")

    path = tmp_path / "prog.json"
    path.write_text(_sum_chain(1))
    monkeypatch.setattr(jsish.cli, "interpret", too_deep)
    assert jsish.cli.main([str(path)]) == 1
    assert capsys.readouterr().err == "jsish: error: nesting too deep\n"
