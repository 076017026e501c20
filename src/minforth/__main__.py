## minforth — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# minforth — A minimal Forth-like stack language with user-defined words.
#

import os
import sys
import time
from pathlib import Path
from dataclasses import dataclass

import click

from .errors import ForthError, DivisionByZero, StackUnderflow, UnknownWord, InvalidWord
from .parser import print_source_context
from .formatting import write_without_ansi, show_stack
from .interpreter import ASCII_LOWERCASE
from .runtime import Forth


PRELUDE_PATH = Path(__file__).resolve().parent / 'libs' / 'prelude.fth'

ERROR_BANNERS = {
    DivisionByZero: "DIVISION BY ZERO.",
    StackUnderflow: "STACK UNDERFLOW.",
    UnknownWord: "UNKNOWN WORD.",
    InvalidWord: "INVALID DEFINITION.",
}


@dataclass(frozen=True)
class RuntimeConfig:
    verbose: int
    ignore: bool
    stats: bool
    plain: bool
    prelude: bool


@dataclass
class ExecutionItem:
    source: str
    filename: str


def resolve_prelude_path() -> Path:
    if (override := os.environ.get("MINFORTH_PRELUDE")):
        return Path(os.path.expanduser(os.path.expandvars(override)))
    return PRELUDE_PATH


class ForthRunner:
    def __init__(self, config: RuntimeConfig):
        self.verbose = config.verbose
        self.ignore = config.ignore
        self.stats_enabled = config.stats
        self.plain = config.plain

        if self.plain:
            writer = write_without_ansi(sys.stdout.write)
            sys.stdout.write, sys.stderr.write = writer, writer

        self.forth = Forth()
        self.total_stats = {'steps': 0, 'start': time.time()} if self.stats_enabled else None
        self.failure = False
        self.executed_items = 0

        if config.prelude:
            self._load_prelude()

    def _load_prelude(self) -> None:
        prelude_path = resolve_prelude_path()
        if not prelude_path.exists():
            self._maybe_fatal_error("PRELUDE ERROR.", f"Prelude `\033[97m{prelude_path}\033[0m` not found!")
            return
        source_text = prelude_path.read_text(encoding='utf-8')
        try:
            self.forth.eval(source_text, filename=str(prelude_path))
        except ForthError as exc:
            self._handle_exception(exc, str(prelude_path), source_text)

    def _maybe_fatal_error(self, message: str, detail: str, exc_type: str = None, context: str = '', is_repl: bool = False) -> None:
        header = detail if not exc_type else f"{detail} (Exception: \033[33m{exc_type}\033[0m)"
        print(f'\033[30;43m {message} \033[0m {header}\n{context}', file=sys.stderr)
        self.failure = True
        if not is_repl and not self.ignore: sys.exit(1)

    def _handle_exception(self, exc: ForthError, filename: str, source: str, is_repl: bool = False) -> None:
        banner = next((b for cls, b in ERROR_BANNERS.items() if isinstance(exc, cls)), "RUNTIME ERROR.")
        detail = f"Word `\033[1;97m{exc.forth_token}\033[0m` from `\033[97m{filename}\033[0m` failed: {exc}"
        print(f'\033[30;43m {banner} \033[0m {detail} (Exception: \033[33m{type(exc).__name__}\033[0m)', file=sys.stderr)
        print_source_context(exc, source, file=sys.stderr)
        print(f'\033[1;33m  Stack content is\033[0;33m\n    ', end='', file=sys.stderr)
        show_stack(exc.forth_stack or (), width=None, file=sys.stderr)
        print('\033[0m', file=sys.stderr)
        if not is_repl:
            self.failure = True
            if not self.ignore: sys.exit(1)

    def execute_items(self, items: list[ExecutionItem], print_result: bool = False) -> None:
        for item in items:
            self._execute_script(item.source, item.filename, print_result=print_result)

    def _execute_script(self, source: str, filename: str, is_repl: bool = False, print_result: bool = False) -> None:
        try:
            self.forth.eval(source, filename=filename, verbosity=self.verbose, stats=self.total_stats)
            if print_result:
                show_stack(self.forth.stack(), width=None)
        except ForthError as exc:
            self._handle_exception(exc, filename, source, is_repl=is_repl)
        else:
            self.executed_items += 1

    def repl(self) -> None:
        if sys.platform != "win32": import readline

        print('minforth - Forth-like stack language REPL; type Ctrl+C to exit.')

        while True:
            try:
                line = input("\033[36m<<< \033[0m")
                if len(line.strip()) == 0: continue
                command = line.strip().translate(ASCII_LOWERCASE)
                # A user word with the same name as a REPL command takes precedence.
                if not self.forth.dictionary.is_known(command):
                    if command in ('quit', 'exit', 'bye'): break
                    if command == 'words':
                        print(' '.join(self.forth.words()) or '∅')
                        continue

                self._execute_script(line, '<REPL>', is_repl=True)
                print("\033[90m>>>\033[0m ", end='')
                show_stack(self.forth.stack(), width=None)

            except (KeyboardInterrupt, EOFError):
                print(""); break

    def finalize(self) -> int:
        if self.total_stats and self.executed_items > 0:
            elapsed_time = time.time() - self.total_stats['start']
            print(f"\n\033[97m\033[48;5;30m STATISTICS. \033[0m")
            print(f"step\t\033[97m{self.total_stats['steps']:,}\033[0m")
            print(f"time\t\033[97m{elapsed_time:.3f}s\033[0m")
        return 1 if self.failure else 0


def _parse_dev_tokens(tokens: list[str]) -> list[tuple[str, Path | str | None]]:
    actions: list[tuple[str, Path | str | None]] = []
    index = 0
    while index < len(tokens):
        token = tokens[index]
        if token == '--':
            index += 1
            continue
        if token in ('-c', '--command'):
            index += 1
            if index >= len(tokens):
                raise click.BadParameter("Missing inline Forth code after -c/--command option.")
            actions.append(('command', tokens[index]))
            index += 1
            continue
        if token.startswith('-c=') or token.startswith('--command='):
            _, value = token.split('=', 1)
            if value == '':
                raise click.BadParameter("Empty Forth code supplied to command option.")
            actions.append(('command', value))
            index += 1
            continue
        if token in ('-r', '--repl'):
            actions.append(('repl', None))
            index += 1
            continue
        if token.startswith('-'):
            raise click.BadParameter(f"Unknown option `{token}`.")
        path = Path(token)
        if not path.exists():
            raise click.BadParameter(f"File `{token}` not found.")
        actions.append(('file', path))
        index += 1
    return actions


@click.group(invoke_without_command=True, context_settings={'ignore_unknown_options': True, 'allow_extra_args': True})
@click.option('--verbose', '-v', default=0, count=True, help='Trace interpreter execution; repeat for every step.')
@click.option('--ignore', '-i', is_flag=True, help='Ignore errors and continue executing.')
@click.option('--stats', is_flag=True, help='Display execution statistics (e.g., number of steps).')
@click.option('--plain', '-p', is_flag=True, help='Strip ANSI color codes and redirect stderr to stdout.')
@click.option('--no-prelude', is_flag=True, help='Do not define the prelude words before running.')
@click.pass_context
def cli(ctx: click.Context, verbose: int, ignore: bool, stats: bool, plain: bool, no_prelude: bool) -> None:
    ctx.ensure_object(dict)
    ctx.obj['config'] = RuntimeConfig(verbose=verbose, ignore=ignore, stats=stats, plain=plain, prelude=not no_prelude)


@cli.command('run-file')
@click.argument('script', type=click.File('r', encoding='utf-8'))
@click.pass_context
def run_file(ctx: click.Context, script) -> None:
    runner = ForthRunner(ctx.obj['config'])
    runner.execute_items((ExecutionItem(script.read(), script.name or '<STDIN>'),))
    ctx.exit(runner.finalize())


@cli.command('run-dev', context_settings={'ignore_unknown_options': True, 'allow_extra_args': True})
@click.argument('tokens', nargs=-1)
@click.pass_context
def run_dev(ctx: click.Context, tokens: tuple[str, ...]) -> None:
    runner = ForthRunner(ctx.obj['config'])
    actions = _parse_dev_tokens(list(tokens))

    command_index = 1
    for action, payload in actions:
        if action == 'file':
            runner.execute_items((ExecutionItem(payload.read_text(encoding='utf-8'), str(payload)),))
        elif action == 'command':
            runner._execute_script(payload, f'<INPUT_{command_index}>', print_result=True)
            command_index += 1
        elif action == 'repl':
            runner.repl()
        else:
            raise NotImplementedError

    if not actions:
        runner.repl()
    ctx.exit(runner.finalize())


@cli.command('run-repl')
@click.pass_context
def run_repl(ctx: click.Context) -> None:
    runner = ForthRunner(ctx.obj['config'])
    runner.repl()
    ctx.exit(runner.finalize())


def main(argv: list[str] | None = None) -> None:
    a = list(sys.argv[1:] if argv is None else argv)
    g = [t for t in a if t in ('--ignore','--stats','--plain','--no-prelude','-i','-p') or t.startswith('-v') or t == '--verbose']
    r = [t for t in a if t not in g]
    pos = [t for t in r if not t.startswith('-')]
    has_dev_opt = any(t in ('-c', '-r', '--repl') or t.startswith('-c=') or t.startswith('--command') for t in r)

    if len(r) == 0:
        # No args: if stdin has data, treat as file '-', else REPL
        cmd, tail = ('run-file', ['-']) if not sys.stdin.isatty() else ('run-repl', [])
    elif r == ['-']:
        cmd, tail = 'run-file', ['-']
    elif not has_dev_opt and len(pos) == 1 and len(r) == 1:
        cmd, tail = 'run-file', pos
    else:
        cmd, tail = 'run-dev', r

    cli.main(args=[*g, cmd, *tail], prog_name='minforth')


if __name__ == "__main__":
    main()
