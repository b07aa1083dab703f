import os
import subprocess
import sys

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
CLI = os.path.join(ROOT, "cli.py")


def run_cli(*args, stdin=""):
    return subprocess.run(
        [sys.executable, CLI, *args],
        input=stdin,
        text=True,
        capture_output=True,
        cwd=ROOT,
        timeout=10,
    )


def write_program(tmp_path, source, name="prog.slpy"):
    path = tmp_path / name
    path.write_text(source, encoding="utf-8")
    return str(path)


def test_run(tmp_path):
    path = write_program(tmp_path, "x = 2 + 3 * 4\nprint(x)\n")
    proc = run_cli("run", path)
    assert proc.returncode == 0, proc.stdout + proc.stderr
    assert proc.stdout == "14\n"


def test_run_with_input(tmp_path):
    path = write_program(tmp_path, 'n = input("n: ")\nprint(n * n)\n')
    proc = run_cli("run", path, stdin="9\n")
    assert proc.stdout == "n: 81\n"


def test_bare_file_name_runs(tmp_path):
    path = write_program(tmp_path, "print(7 // 2)\n")
    proc = run_cli(path)
    assert proc.returncode == 0
    assert proc.stdout == "3\n"


def test_runtime_error_is_located_and_exits_1(tmp_path):
    path = write_program(tmp_path, "print(5)\nprint(1 // 0)\n")
    proc = run_cli("run", path)
    assert proc.returncode == 1
    assert proc.stdout == f"5\n{path}:2:9:\n\tDivision by zero.\n"


def test_lex_error_stops_before_running(tmp_path):
    path = write_program(tmp_path, "print(1)\nx = 007\n")
    proc = run_cli("run", path)
    assert proc.returncode == 1
    assert proc.stdout.startswith(f"{path}:2:6:")
    assert "leading zero" in proc.stdout


def test_missing_file():
    proc = run_cli("run", "does-not-exist.slpy")
    assert proc.returncode == 1
    assert proc.stdout == "does-not-exist.slpy:\n\tFile not found.\n"


def test_debug_shows_traceback(tmp_path):
    path = write_program(tmp_path, "print(y)\n")
    proc = run_cli("run", path, "--debug")
    assert proc.returncode == 1
    assert "Traceback" in proc.stderr
    assert "UnboundVariable" in proc.stderr


def test_tokens(tmp_path):
    path = write_program(tmp_path, "x = 1\n\tprint(x)\n")
    proc = run_cli("tokens", path)
    assert proc.returncode == 0
    assert proc.stdout.splitlines() == [
        "x:1:1",
        "=:1:3",
        "1:1:5",
        "[NEWLINE]:1:6",
        "[INDENT-8]:2:1",
        "print:2:9",
        "(:2:14",
        "x:2:15",
        "):2:16",
        "[NEWLINE]:2:17",
        "[EOF]:3:1",
    ]


def test_tokens_flag_dumps_then_runs(tmp_path):
    path = write_program(tmp_path, "print(1)\n")
    proc = run_cli("--tokens", path)
    assert proc.stdout.splitlines()[-2:] == ["[EOF]:2:1", "1"]


def test_pprint(tmp_path):
    path = write_program(tmp_path, "x = 2 + 3 * 4  # comment\n  print(int(x))\n")
    proc = run_cli("pprint", path)
    assert proc.returncode == 0
    assert proc.stdout == "x = (2 + (3 * 4))\nprint(int(x))\n"


def test_pprint_flag_does_not_execute(tmp_path):
    path = write_program(tmp_path, 'x = input("?")\nprint(1 // 0)\n')
    proc = run_cli("--pprint", path)
    assert proc.returncode == 0
    assert proc.stdout == 'x = input("?")\nprint((1 // 0))\n'


def test_parse_dumps_tree(tmp_path):
    path = write_program(tmp_path, "x = 1 * y\n")
    proc = run_cli("parse", path)
    assert proc.returncode == 0
    assert "type: Assign" in proc.stdout
    assert "op: Mul" in proc.stdout
    assert "name: y" in proc.stdout


def test_trace(tmp_path):
    path = write_program(tmp_path, "x = 3\nprint(x)\n")
    proc = run_cli("run", path, "--trace")
    assert proc.stdout == "3\n"
    assert proc.stderr.splitlines() == ["TRACE 1:1 x = 3", "TRACE 2:1 print(x)"]


def test_usage():
    proc = run_cli()
    assert proc.returncode == 1
    assert "Usage:" in proc.stdout


def test_unknown_option(tmp_path):
    path = write_program(tmp_path, "pass\n")
    proc = run_cli("run", path, "--fast")
    assert proc.returncode == 1
    assert "Unknown option: --fast" in proc.stdout
