import sys
import cmd
import shlex
import argparse
from typing import Dict, List, Optional, Sequence, Tuple

from . import __version__
from . import core
from .core import TRANSFORM_REGISTRY, catalog, create_transform, load_plugins, log_info
from .pipeline import DEFAULT_SOURCE_TEXT, Evaluation, Pipeline
from .settings import apply_overrides, describe

# ==========================================
#  STAGE SPECS: "id" or "id:key=value,key=value"
# ==========================================

def parse_overrides(pairs: Sequence[str]) -> Dict[str, str]:
    overrides = {}
    for pair in pairs:
        if not pair.strip():
            continue
        key, sep, value = pair.partition("=")
        if not sep:
            raise ValueError(f"expected key=value, got '{pair}'")
        overrides[key.strip()] = value
    return overrides

def parse_stage(spec: str) -> Tuple[str, Dict[str, str]]:
    name, _, settings = spec.partition(":")
    return name.strip(), parse_overrides(settings.split(",")) if settings else {}

def configure_stage(stage, overrides: Dict[str, str]) -> List[str]:
    """Apply overrides to a stage; returns the problems found, if any."""
    editor = apply_overrides(stage, overrides)
    problems = list(editor.errors)
    problems.extend(f"{key}: no such setting for '{stage.name}'" for key in editor.unused())
    return problems

def build_pipeline(stage_specs: Sequence[str], source_text: str) -> Pipeline:
    pipeline = Pipeline(source_text)
    for spec in stage_specs:
        try:
            name, overrides = parse_stage(spec)
        except ValueError as e:
            sys.exit(f"Error: Bad stage '{spec}': {e}")
        stage = pipeline.add(name)
        if stage is None:
            sys.exit(f"Error: Unknown transform '{name}'. Use --list to see them all.")
        problems = configure_stage(stage, overrides)
        if problems:
            sys.exit(f"Error: Bad settings for '{name}': " + "; ".join(problems))
    return pipeline

# ==========================================
#  RENDERING
# ==========================================

def render_chain(pipeline: Pipeline, evaluation: Evaluation) -> str:
    lines = []
    for index, (stage, output) in enumerate(zip(pipeline, evaluation.outputs), start=1):
        marker = " *" if pipeline.drag_index == index - 1 else ""
        lines.append(f"[{index}] {stage.display_name}{marker}")
        lines.append(output)
    if not lines:
        lines.append(evaluation.final)
    return "\n".join(lines)

def render_settings(stage) -> str:
    fields = describe(stage)
    if not fields:
        return "  (no settings)"
    lines = []
    for field in fields:
        line = f"  {field.key:<18} = {field.value!r}"
        if field.options:
            line += "  [" + ", ".join(str(value) for value, _ in field.options) + "]"
        lines.append(line)
    return "\n".join(lines)

def list_transforms():
    """Print all available transforms grouped by category."""
    print("\nAvailable Transforms:")
    print("=" * 60)
    current = None
    for entry in catalog():
        if entry.category != current:
            current = entry.category
            print(f"\n  {current}")
        print(f"    {entry.name:<14} {entry.display_name:<28} {entry.description}")
    print("=" * 60)
    print(f"\nTotal: {len(TRANSFORM_REGISTRY)} transform(s) registered.")

def describe_transform(name: str):
    stage = create_transform(name)
    print(f"{stage.name}: {stage.display_name} ({stage.category})")
    if stage.description:
        print(f"  {stage.description}")
    print(render_settings(stage))

# ==========================================
#  INTERACTIVE HOST
# ==========================================

class PipelineShell(cmd.Cmd):
    """
    Line-oriented host for a Pipeline.

    Stage numbers are 1-based as printed. After every command the chain
    is evaluated again from the source text.
    """

    intro = "Cipher pipeline shell. Type 'help' for commands, 'quit' to leave."
    prompt = "pipeline> "

    def __init__(self, pipeline: Optional[Pipeline] = None, **kwargs):
        super().__init__(**kwargs)
        self.pipeline = pipeline if pipeline is not None else Pipeline()

    def _say(self, text: str):
        self.stdout.write(text + "\n")

    def _index(self, arg: str) -> Optional[int]:
        try:
            return int(arg) - 1
        except ValueError:
            self._say(f"Not a stage number: '{arg}'")
            return None

    def emptyline(self):
        return False

    def postcmd(self, stop, line):
        if not stop and line.strip() and line.split()[0] not in ("help", "list", "show"):
            self._say(render_chain(self.pipeline, self.pipeline.evaluate()))
        return stop

    def default(self, line):
        self._say(f"Unknown command: {line.split()[0]}")

    def do_text(self, arg):
        """text <source text>: replace the source text."""
        self.pipeline.source_text = arg

    def do_add(self, arg):
        """add <id> [key=value ...]: append a stage."""
        parts = shlex.split(arg)
        if not parts:
            self._say("Usage: add <id> [key=value ...]")
            return
        stage = self.pipeline.add(parts[0])
        if stage is None:
            self._say(f"Unknown transform '{parts[0]}'")
            return
        self._configure(stage, parts[1:])

    def do_remove(self, arg):
        """remove <n>: delete stage n."""
        index = self._index(arg)
        if index is not None and not self.pipeline.remove(index):
            self._say(f"No stage {arg}")

    def do_swap(self, arg):
        """swap <a> <b>: exchange two stages."""
        parts = arg.split()
        if len(parts) != 2:
            self._say("Usage: swap <a> <b>")
            return
        first, second = self._index(parts[0]), self._index(parts[1])
        if first is not None and second is not None:
            self.pipeline.swap(first, second)

    def do_up(self, arg):
        """up <n>: move stage n one place up."""
        index = self._index(arg)
        if index is not None:
            self.pipeline.move_up(index)

    def do_down(self, arg):
        """down <n>: move stage n one place down."""
        index = self._index(arg)
        if index is not None:
            self.pipeline.move_down(index)

    def do_set(self, arg):
        """set <n> key=value [...]: change settings of stage n."""
        parts = shlex.split(arg)
        if len(parts) < 2:
            self._say("Usage: set <n> key=value [...]")
            return
        index = self._index(parts[0])
        if index is None:
            return
        if not 0 <= index < len(self.pipeline):
            self._say(f"No stage {parts[0]}")
            return
        self._configure(self.pipeline[index], parts[1:])

    def _configure(self, stage, pairs):
        try:
            overrides = parse_overrides(pairs)
        except ValueError as e:
            self._say(str(e))
            return
        for problem in configure_stage(stage, overrides):
            self._say(problem)

    def do_show(self, arg):
        """show [n]: print settings of one stage or of all stages."""
        if arg.strip():
            index = self._index(arg)
            if index is None or not 0 <= index < len(self.pipeline):
                self._say(f"No stage {arg}")
                return
            targets = [(index, self.pipeline[index])]
        else:
            targets = list(enumerate(self.pipeline))
        self._say(f"Source: {self.pipeline.source_text!r}")
        for index, stage in targets:
            self._say(f"[{index + 1}] {stage.name}")
            self._say(render_settings(stage))

    def do_list(self, arg):
        """list: show the transform catalog."""
        for entry in catalog():
            self._say(f"{entry.category:<24} {entry.name:<14} {entry.display_name}")

    def do_clear(self, arg):
        """clear: remove every stage and restore the default text."""
        self.pipeline.clear()

    def do_quit(self, arg):
        """quit: leave the shell."""
        return True

    do_EOF = do_quit

# ==========================================
#  CLI LOGIC
# ==========================================

def _early_option(argv: Sequence[str], flag: str) -> Optional[str]:
    for i, arg in enumerate(argv):
        if arg == flag and i + 1 < len(argv):
            return argv[i + 1]
        if arg.startswith(flag + "="):
            return arg.split("=", 1)[1]
    return None

def main(argv: Optional[Sequence[str]] = None):
    if argv is None:
        argv = sys.argv[1:]
    argv = list(argv)

    # Preliminary scan for --verbose (needed before plugin loading)
    core.set_verbose("--verbose" in argv or "-v" in argv)

    # Load plugins before parsing args so they appear in --list and --describe
    if "--no-plugins" not in argv:
        loaded_plugins = load_plugins(_early_option(argv, "--plugin-dir"))
        if loaded_plugins:
            log_info(f"Loaded plugins: {', '.join(loaded_plugins)}")

    parser = argparse.ArgumentParser(
        prog="cipher-pipeline",
        description="Run text through a chain of ciphers and encodings.",
        epilog="Example: cipher-pipeline -s caesar:shift=3 -s rot13 -t abc",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    parser.add_argument("-s", "--stage", action="append", default=[], metavar="ID[:K=V,...]",
                        help="Append a stage, optionally with settings (repeatable).")

    action_group = parser.add_mutually_exclusive_group()
    action_group.add_argument("-l", "--list", action="store_true", help="List all available transforms")
    action_group.add_argument("--describe", choices=list(TRANSFORM_REGISTRY), metavar="ID",
                              help="Show the settings of one transform")
    action_group.add_argument("--interactive", action="store_true",
                              help="Start an interactive shell to edit the chain")

    parser.add_argument("--final-only", action="store_true",
                        help="Print only the last stage's output")
    parser.add_argument("--plugin-dir", type=str, metavar="PATH",
                        help="Custom plugin directory (must contain manifest.json)")
    parser.add_argument("--no-plugins", action="store_true", help="Do not load any plugins")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable verbose output (info and warning messages)")

    io_group = parser.add_mutually_exclusive_group()
    io_group.add_argument("-t", "--text", help="Direct text input")
    io_group.add_argument("-i", "--input", help="Input file path")

    parser.add_argument("-o", "--output", help="Output file path")

    args = parser.parse_args(argv)

    if args.list:
        list_transforms()
        return 0

    if args.describe:
        describe_transform(args.describe)
        return 0

    if args.interactive:
        pipeline = build_pipeline(args.stage, args.text if args.text is not None else DEFAULT_SOURCE_TEXT)
        PipelineShell(pipeline).cmdloop()
        return 0

    # 1. READ INPUT
    if args.text is not None:
        source_text = args.text
    elif args.input:
        try:
            with open(args.input, "r", encoding="utf-8") as f:
                source_text = f.read()
        except FileNotFoundError:
            sys.exit(f"Error: File '{args.input}' not found.")
    elif not sys.stdin.isatty():
        source_text = sys.stdin.read()
    else:
        print("[PIPELINE] Paste input below. Ctrl+D (Unix) or Ctrl+Z (Win) to end:")
        try:
            source_text = sys.stdin.read()
        except KeyboardInterrupt:
            return 0

    # 2. BUILD AND EVALUATE
    pipeline = build_pipeline(args.stage, source_text)
    evaluation = pipeline.evaluate()
    result = evaluation.final if args.final_only else render_chain(pipeline, evaluation)

    # 3. WRITE OUTPUT
    if args.output:
        try:
            with open(args.output, "w", encoding="utf-8") as f:
                f.write(result)
        except OSError as e:
            sys.exit(f"Error: Could not write output: {e}")
    else:
        print(result)
    return 0

if __name__ == "__main__":
    sys.exit(main())
