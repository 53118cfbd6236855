#!/usr/bin/env python3
"""Check for banned Python constructions in magicargs core modules.

Banned constructions:

    Construction          Reason                            Use instead
    --------------------  --------------------------------  --------------------------
    sys.exit(...)         core never ends the process,      return an Outcome and let
    os._exit(...)         callers decide from the Outcome   magicargs.magic exit
    exit(...), quit(...)
"""

import ast
import os
import sys

BANNED_CALLS = frozenset({("sys", "exit"), ("os", "_exit")})
BANNED_BUILTINS = frozenset({"exit", "quit"})


def find_python_files(directory):
    """Find all .py files recursively."""
    result = []
    for root, dirs, files in os.walk(directory):
        for f in files:
            if f.endswith(".py"):
                result.append(os.path.join(root, f))
    result.sort()
    return result


def check_file(filepath):
    with open(filepath) as f:
        source = f.read()

    tree = ast.parse(source, filepath)
    errors = []

    for node in ast.walk(tree):
        if not isinstance(node, ast.Call):
            continue
        func = node.func

        # sys.exit(...) / os._exit(...)
        if isinstance(func, ast.Attribute) and isinstance(func.value, ast.Name):
            if (func.value.id, func.attr) in BANNED_CALLS:
                errors.append(
                    (node.lineno, f"{func.value.id}.{func.attr}(): banned, return an Outcome")
                )

        # exit(...) / quit(...)
        if isinstance(func, ast.Name) and func.id in BANNED_BUILTINS:
            errors.append((node.lineno, f"{func.id}(): banned, return an Outcome"))

    return errors


def main():
    src_dir = "src/magicargs/core"
    if len(sys.argv) > 1:
        src_dir = sys.argv[1]

    if not os.path.isdir(src_dir):
        print(f"Directory not found: {src_dir}")
        sys.exit(1)

    files = find_python_files(src_dir)
    if not files:
        print(f"No Python files found in: {src_dir}")
        sys.exit(1)

    all_errors = []
    for filepath in files:
        try:
            errors = check_file(filepath)
            for lineno, description in errors:
                all_errors.append((filepath, lineno, description))
        except SyntaxError as e:
            print(f"Syntax error in {filepath}: {e}")
            sys.exit(1)

    if not all_errors:
        sys.exit(0)

    print(f"Found {len(all_errors)} banned construction(s):")
    for filepath, lineno, description in sorted(all_errors):
        print(f"  {filepath}:{lineno}: {description}")
    sys.exit(1)


if __name__ == "__main__":
    main()
