import sys
import textwrap
from types import SimpleNamespace

import pytest

from irepl.api import (
    Color,
    Command,
    CommandKind,
    OutputEvent,
    SetTitle,
    SetWelcomeMsg,
    Shutdown,
    Startup,
)
from irepl.scripts.ipython import IPython, postprocess_output

GLOBALS = SimpleNamespace(cursor_position=(0, 0), prompt_position=(0, 0))

FAKE_SHELL = textwrap.dedent(
    """
    import sys, time
    out = sys.stdout
    out.write("Fake shell banner\\n")
    out.flush()
    time.sleep(0.3)
    out.write("In [1]: ")
    out.flush()
    n = 1
    while True:
        line = sys.stdin.readline()
        if not line:
            break
        line = line.rstrip("\\n")
        if line == "exit":
            break
        n += 1
        if line == "silent":
            continue
        if line.startswith("x ="):
            out.write("\\nIn [%d]: " % n)
        else:
            out.write("Out[%d]: %s\\n\\nIn [%d]: " % (n - 1, line, n))
        out.flush()
    """
)


@pytest.fixture
def fake_command(tmp_path):
    script = tmp_path / "fake_shell.py"
    script.write_text(FAKE_SHELL)
    return (sys.executable, "-u", str(script))


@pytest.fixture
def shell(fake_command):
    ipython = IPython.start(fake_command)
    yield ipython
    if ipython.process is not None and ipython.process.poll() is None:
        ipython.process.kill()
        ipython.process.wait()


def printed(text):
    return Command(CommandKind.PRINT_OUTPUT, (text, Color.BLUE))


def test_postprocess_drops_prompt_line():
    assert postprocess_output("Out[1]: 2\n\nIn [2]: ") == "Out[1]: 2"


def test_postprocess_keeps_text_after_continuation_prompt():
    out = "   ...: total\nOut[3]: 7\n\nIn [4]: "
    assert postprocess_output(out) == "total\nOut[3]: 7"


def test_postprocess_statement_is_empty():
    assert postprocess_output("\nIn [2]: ") == ""
    assert postprocess_output("") == ""


def test_commands_are_ignored_without_starting():
    ipython = IPython(command=("definitely-not-a-real-shell",))
    assert ipython.handle_output_event(OutputEvent(GLOBALS, ":help")) is None
    assert ipython.process is None


def test_expression_output(shell):
    result = shell.handle_output_event(OutputEvent(GLOBALS, "1+1"))
    assert result == printed("Out[1]: 1+1\n")


def test_statement_prints_unit(shell):
    result = shell.handle_output_event(OutputEvent(GLOBALS, "x = 3"))
    assert result == printed("()\n")


def test_no_answer_prints_unit(shell):
    result = shell.handle_output_event(OutputEvent(GLOBALS, "silent"))
    assert result == printed("()\n")


def test_starts_lazily_on_first_input(fake_command):
    ipython = IPython(command=fake_command)
    try:
        result = ipython.handle_output_event(OutputEvent(GLOBALS, "abc"))
        assert result == printed("Out[1]: abc\n")
        assert ipython.process.poll() is None
    finally:
        ipython.process.kill()
        ipython.process.wait()


def test_clean_up_makes_the_shell_exit(shell):
    shell.clean_up()
    assert shell.process.wait(timeout=10) == 0


def test_run_title_and_welcome():
    ipython = IPython()
    assert ipython.run(SetTitle()) == "IPython"
    assert ipython.run(SetWelcomeMsg()) == "IPython"


def test_run_startup_and_shutdown(fake_command):
    ipython = IPython(command=fake_command)
    assert ipython.run(Startup(GLOBALS)) is None
    try:
        assert ipython.run(OutputEvent(GLOBALS, "42")) == printed("Out[1]: 42\n")
        assert ipython.run(Shutdown(GLOBALS)) is None
        assert ipython.process.wait(timeout=10) == 0
    finally:
        if ipython.process.poll() is None:
            ipython.process.kill()
            ipython.process.wait()


def test_run_rejects_other_hooks():
    with pytest.raises(ValueError):
        IPython().run("not a hook")


def test_missing_shell_raises():
    with pytest.raises(FileNotFoundError):
        IPython.start(("definitely-not-a-real-shell-binary",))