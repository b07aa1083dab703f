import sys
import traceback

import colorama

from ast_nodes import Program, Block, Print
from errors import SlpyError, ParseError, SourceLocation
from interpreter import Interpreter
from lexer import tokenize
from parser import Parser, parse_tokens
from printer import render


USAGE = """Usage:
  python cli.py run <file.slpy>
  python cli.py tokens <file.slpy>
  python cli.py pprint <file.slpy>
  python cli.py parse <file.slpy>
  python cli.py repl
  python cli.py [--tokens] [--pprint] <file.slpy>
  (optional) --debug to show Python traceback
  (optional) --trace to trace executed statements (run/repl)"""


# Simple AST printer (so you can SEE what the parser built)
def ast_to_dict(node):
    if node is None:
        return None

    t = node.__class__.__name__
    d = {"type": t}

    if t == "Program":
        d["body"] = ast_to_dict(node.body)
    elif t == "Block":
        d["statements"] = [ast_to_dict(s) for s in node.statements]
    elif t == "Assign":
        d["name"] = node.name
        d["value"] = ast_to_dict(node.value)
    elif t == "Print":
        d["value"] = ast_to_dict(node.value)
    elif t == "Pass":
        pass
    elif t == "BinaryOp":
        d["op"] = node.op
        d["left"] = ast_to_dict(node.left)
        d["right"] = ast_to_dict(node.right)
    elif t == "IntLiteral":
        d["value"] = node.value
    elif t == "VarRef":
        d["name"] = node.name
    elif t == "Input":
        d["prompt"] = node.prompt
    elif t == "IntConvert":
        d["inner"] = ast_to_dict(node.inner)
    else:
        d["raw"] = str(node)

    return d


def pretty(obj, indent=0):
    sp = "  " * indent
    if isinstance(obj, dict):
        lines = []
        for k, v in obj.items():
            if isinstance(v, (dict, list)):
                lines.append(f"{sp}{k}:")
                lines.append(pretty(v, indent + 1))
            else:
                # prompts may hold newlines/tabs
                shown = repr(v) if k == "prompt" else v
                lines.append(f"{sp}{k}: {shown}")
        return "\n".join(lines)
    if isinstance(obj, list):
        lines = []
        for item in obj:
            lines.append(f"{sp}-")
            lines.append(pretty(item, indent + 1))
        return "\n".join(lines)
    return f"{sp}{obj}"


def report_error(e, debug: bool = False):
    if debug:
        traceback.print_exc()
        return
    text = str(e)
    if sys.stdout.isatty():
        text = f"{colorama.Fore.RED}{text}{colorama.Style.RESET_ALL}"
    print(text)


def read_source(path):
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except OSError:
        raise SlpyError(SourceLocation(path, -1, -1), "File not found.")


def load_program(path, dump_tokens: bool = False):
    code = read_source(path)
    stream = tokenize(code, path)
    if dump_tokens:
        for line in stream.dump():
            print(line)
    return parse_tokens(stream)


def cmd_tokens(path, debug: bool = False):
    try:
        code = read_source(path)
        stream = tokenize(code, path)
    except SlpyError as e:
        report_error(e, debug)
        sys.exit(1)

    for line in stream.dump():
        print(line)


def cmd_parse(path, debug: bool = False):
    try:
        program = load_program(path)
    except SlpyError as e:
        report_error(e, debug)
        sys.exit(1)

    print(pretty(ast_to_dict(program)))


def cmd_pprint(path, debug: bool = False, dump_tokens: bool = False):
    try:
        program = load_program(path, dump_tokens=dump_tokens)
    except SlpyError as e:
        report_error(e, debug)
        sys.exit(1)

    sys.stdout.write(render(program))


def cmd_run(path, debug: bool = False, trace: bool = False, dump_tokens: bool = False):
    try:
        program = load_program(path, dump_tokens=dump_tokens)
        Interpreter(trace=trace).run(program)
    except SlpyError as e:
        sys.stdout.flush()
        report_error(e, debug)
        sys.exit(1)


def parse_repl_entry(source):
    # First, try parsing as a normal program (statements).
    try:
        return parse_tokens(tokenize(source, "<repl>"))
    except ParseError as parse_err:
        # If that fails, try parsing as a single expression and auto-print it.
        try:
            stream = tokenize(source, "<repl>")
            expr = Parser(stream).expr()
            stream.consume_end_of_line()
            if not stream.is_end_of_stream():
                raise parse_err
        except SlpyError:
            raise parse_err
        return Program(Block([Print(expr, expr.location)], expr.location), expr.location)


def cmd_repl(debug: bool = False, trace: bool = False):
    interpreter = Interpreter(trace=trace)
    env = {}

    print("slpy REPL. Type :q to quit.")

    while True:
        try:
            line = input("slpy> ")
        except (EOFError, KeyboardInterrupt):
            print()
            break

        stripped = line.strip()
        if stripped in (":q", ":quit", "quit", "exit"):
            break
        if not stripped:
            continue

        try:
            program = parse_repl_entry(line + "\n")
            interpreter.execute_in(program, env)
        except SlpyError as e:
            report_error(e, debug)


def main():
    colorama.just_fix_windows_console()

    argv = sys.argv[1:]
    flags = {arg for arg in argv if arg.startswith("--")}
    args = [arg for arg in argv if not arg.startswith("--")]

    unknown = flags - {"--debug", "--trace", "--tokens", "--pprint"}
    if unknown:
        print(f"Unknown option: {sorted(unknown)[0]}")
        sys.exit(1)

    debug = "--debug" in flags
    trace = "--trace" in flags

    if not args:
        print(USAGE)
        sys.exit(1)

    cmd = args[0]

    if cmd == "repl":
        if len(args) != 1:
            print(USAGE)
            sys.exit(1)
        cmd_repl(debug=debug, trace=trace)
        return

    # Original-style invocation: [--tokens] [--pprint] <file>
    if cmd not in ("run", "tokens", "pprint", "parse"):
        if len(args) != 1:
            print(USAGE)
            sys.exit(1)
        dump_tokens = "--tokens" in flags
        if "--pprint" in flags:
            cmd_pprint(cmd, debug=debug, dump_tokens=dump_tokens)
        else:
            cmd_run(cmd, debug=debug, trace=trace, dump_tokens=dump_tokens)
        return

    if len(args) != 2:
        print(USAGE)
        sys.exit(1)

    path = args[1]

    if cmd == "run":
        cmd_run(path, debug=debug, trace=trace)
    elif cmd == "tokens":
        cmd_tokens(path, debug=debug)
    elif cmd == "pprint":
        cmd_pprint(path, debug=debug)
    elif cmd == "parse":
        cmd_parse(path, debug=debug)


if __name__ == "__main__":
    main()
