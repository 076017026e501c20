## minforth — CLI integration tests

import os, sys
import subprocess
from pathlib import Path


def repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


def _env(env: dict | None) -> dict:
    merged_env = os.environ.copy()
    merged_env["PYTHONPATH"] = os.pathsep.join(p for p in (str(repo_root() / "src"), merged_env.get("PYTHONPATH")) if p)
    if env:
        merged_env.update(env)
    return merged_env


def run_cli(*cli_args: str | Path, env: dict | None = None, stdin: str | None = None) -> subprocess.CompletedProcess:
    args = [sys.executable, "-m", "minforth", "--plain"]
    args.extend(str(arg) for arg in cli_args)
    return subprocess.run(args, input=stdin or "", capture_output=True, text=True, env=_env(env))


def test_cli_inline_command_prints_stack():
    result = run_cli("-c", "1 2 + 4")
    assert result.returncode == 0, result.stdout
    assert result.stdout.strip().splitlines()[-1] == "3 4"


def test_cli_prelude_words_are_available():
    result = run_cli("-c", "3 square 1 2 nip")
    assert result.returncode == 0, result.stdout
    assert result.stdout.strip().splitlines()[-1] == "9 2"


def test_cli_no_prelude():
    result = run_cli("--no-prelude", "-c", "3 square")
    assert result.returncode != 0
    assert "UNKNOWN WORD." in result.stdout


def test_cli_prelude_from_environment(tmp_path):
    prelude = tmp_path / "custom.fth"
    prelude.write_text(": seven 7 ;\n", encoding="utf-8")
    result = run_cli("-c", "seven", env={"MINFORTH_PRELUDE": str(prelude)})
    assert result.returncode == 0, result.stdout
    assert result.stdout.strip().splitlines()[-1] == "7"


def test_cli_runs_file(tmp_path):
    script = tmp_path / "program.fth"
    script.write_text(": foo 1 ;\n: bar foo 1 + ;\n: foo 2 ;\nbar foo\n", encoding="utf-8")
    result = run_cli(script)
    assert result.returncode == 0, result.stdout


def test_cli_runtime_error_shows_context_and_stack(tmp_path):
    script = tmp_path / "underflow.fth"
    script.write_text("1 2\n3 drop drop drop drop\n", encoding="utf-8")
    result = run_cli(script)
    assert result.returncode != 0
    out = result.stdout
    assert "STACK UNDERFLOW." in out
    assert "line 2" in out
    assert "Stack content is" in out


def test_cli_division_by_zero_banner():
    result = run_cli("-c", "1 0 /")
    assert result.returncode != 0
    assert "DIVISION BY ZERO." in result.stdout


def test_cli_invalid_definition_banner():
    result = run_cli("-c", ": 1 2 ;")
    assert result.returncode != 0
    assert "INVALID DEFINITION." in result.stdout


def test_cli_ignore_continues_after_error():
    result = run_cli("--ignore", "-c", "foo", "-c", "5")
    assert result.returncode == 1
    assert "UNKNOWN WORD." in result.stdout
    assert result.stdout.strip().splitlines()[-1] == "5"


def test_cli_stdin_as_file():
    result = run_cli("-", stdin="2 3 *\n")
    assert result.returncode == 0, result.stdout


def test_cli_stats():
    result = run_cli("--stats", "-c", "1 2 +")
    assert result.returncode == 0, result.stdout
    assert "STATISTICS." in result.stdout
    assert "step\t3" in result.stdout


def test_cli_repl_evaluates_lines_and_lists_words():
    result = run_cli("--no-prelude", "-r", stdin=": sq dup * ;\n3 sq\nwords\nquit\n5\n")
    assert result.returncode == 0, result.stdout
    out = result.stdout
    assert ">>> 9" in out
    assert any(line.endswith("sq") for line in out.splitlines())
    # Input after `quit` is never evaluated.
    assert ">>> 9 5" not in out


def test_cli_repl_user_word_shadows_repl_command():
    result = run_cli("--no-prelude", "-r", stdin=": words 42 ;\nwords\nQUIT\n")
    assert result.returncode == 0, result.stdout
    assert ">>> 42" in result.stdout
