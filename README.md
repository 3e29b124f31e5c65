# irepl

`irepl` evaluates Rust snippets incrementally. It keeps a scratch cargo
project (`irust_host_repl`) in your temporary directory, holds the session
as the lines of that project's `main` function, and builds and runs the
project with `cargo` each time something is evaluated.

## Requirements

- Python 3.10 or newer
- A Rust toolchain with `cargo`; `rustfmt` is used when present to format `Repl.show()`
- `cargo-add` and `cargo-rm`, needed for dependencies and for the async executors

Setting `CARGO_TARGET_DIR` moves the build output of the scratch project.

## Installation

```
pip install .
```

## Command line

Evaluate a single expression and print its `{:?}` output:

```
irepl '1 + 2'
```

With two arguments, the first is passed to `cargo-add` before the
expression is evaluated. Double quotes group words together:

```
irepl 'regex --features "std"' 'regex::Regex::new("a+").is_ok()'
```

Giving no code, or more than two arguments, exits with an error message.

## Library use

```python
from irepl.repl import Repl
from irepl.options import Executor

repl = Repl()
repl.insert("let a = 4;")
repl.insert("let b = 6;")
print(repl.eval("a+b").output)        # 10

repl.set_executor(Executor.ASYNC_STD)
repl.insert("async fn d() -> usize {4}")
print(repl.eval("d().await").output)  # 4
```

`Repl` takes a `ToolChain`, `Executor`, `MainResult`, `Edition` and
`ReplPaths`, all optional. Besides `insert` and `eval` it has
`eval_with_configuration` (with an `EvalConfig`), `eval_build`,
`eval_check`, `show`, `pop`, `delete`, `reset`, `lines`, `lines_count`,
`add_dep`, `build`, `write`, `write_to_extern`, `write_lib` and
`update_from_extern_main_file`. Evaluations return an `EvalResult` with
`output`, `status` and `success`.

## Modules

- `irepl.repl`: `Repl`, `EvalConfig`, `EvalResult`, `DEFAULT_EVALUATOR`
- `irepl.options`: `Edition`, `Executor`, `MainResult`, `ToolChain`, each with `parse`
- `irepl.cargo`: the cargo, cargo-add, cargo-rm and rustfmt commands, and `ReplPaths` / `default_paths()` for the project's file locations
- `irepl.process`: `interactive_output`, which collects a child's output while a callback can feed or kill it
- `irepl.textutils`: `split_args`, `remove_comments`, `remove_main`, `unmatched_brackets`, `strings_unique` and other string helpers
- `irepl.buffer`, `irepl.bound`, `irepl.cursor`, `irepl.terminal`, `irepl.printqueue`: an editable character `Buffer`, per-row `Bound`s, a `Cursor` that tracks position over a wrapped input area, a `Terminal` that writes ANSI sequences, and `PrintQueue` / `PrinterItem` with `default_process_fn`
- `irepl.api`: events, `Command` / `CommandKind`, `GlobalVariables` and the hook types (`InputEvent`, `OutputEvent`, `SetTitle`, `SetWelcomeMsg`, `Startup`, `Shutdown`, `SetInputPrompt`, `SetOutputPrompt`)
- `irepl.scripts`: hook scripts, each answering a hook through `run(hook)`
  - `prompt.Prompt`: prompts of the form `In [n]: ` and `Out [n]: `
  - `fun.Fun`: `:fun def NAME BODY` and `:fun NAME ARGS...` templates, saved as TOML under the user config directory (`irust/functions.toml`)
  - `vim.Vim`: vi-style normal and insert modes
  - `ipython.IPython`: forwards input to an `ipython` process

## What it does not do

There is no interactive terminal REPL here: no key-reading loop and no
screen printer that draws the prompt and input. The line-editor modules
are building blocks only. Likewise there is no host that discovers and
runs hook scripts; the script classes are called directly with hook
objects.