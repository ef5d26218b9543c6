from typing import Iterable, List, NamedTuple, Optional, Sequence, Tuple

from .core import Transform, create_transform, log_info, log_warn

DEFAULT_SOURCE_TEXT = "The quick brown fox jumps over the lazy dog."


class Evaluation(NamedTuple):
    outputs: List[str]
    final: str


class Pipeline:
    """
    Ordered chain of transform stages fed by one source text.

    The stage list is the single source of truth: every index-bearing
    request is checked against its current length and silently ignored
    when stale. Output is never cached; `evaluate` recomputes every stage
    from `source_text` and each stage's current configuration.
    """

    def __init__(self, source_text: str = DEFAULT_SOURCE_TEXT):
        self.source_text = source_text
        self._stages: List[Transform] = []
        self.drag_index: Optional[int] = None

    @property
    def stages(self) -> Tuple[Transform, ...]:
        return tuple(self._stages)

    def __len__(self):
        return len(self._stages)

    def __getitem__(self, index: int) -> Transform:
        return self._stages[index]

    def __iter__(self):
        return iter(self._stages)

    def _valid(self, index) -> bool:
        return isinstance(index, int) and 0 <= index < len(self._stages)

    # ==========================================
    #  STRUCTURAL EDITS
    # ==========================================

    def add(self, name: str) -> Optional[Transform]:
        """Append a fresh stage for `name`. Unknown ids are ignored."""
        stage = create_transform(name)
        if stage is None:
            log_info(f"Unknown transform '{name}' ignored.")
            return None
        self._stages.append(stage)
        return stage

    def remove(self, index: int) -> bool:
        if not self._valid(index):
            log_info(f"remove({index}) ignored: {len(self._stages)} stage(s).")
            return False
        del self._stages[index]
        if self.drag_index == index:
            self.drag_index = None
        elif self.drag_index is not None and self.drag_index > index:
            self.drag_index -= 1
        return True

    def swap(self, first: int, second: int) -> bool:
        """Exchange two stages. The drag index follows the stage it points at."""
        if not (self._valid(first) and self._valid(second)):
            log_info(f"swap({first}, {second}) ignored: {len(self._stages)} stage(s).")
            return False
        if first == second:
            return False
        stages = self._stages
        stages[first], stages[second] = stages[second], stages[first]
        if self.drag_index == first:
            self.drag_index = second
        elif self.drag_index == second:
            self.drag_index = first
        return True

    reorder = swap

    def move_up(self, index: int) -> bool:
        return self.swap(index, index - 1) if index > 0 else False

    def move_down(self, index: int) -> bool:
        return self.swap(index, index + 1)

    def clear(self):
        self._stages = []
        self.source_text = DEFAULT_SOURCE_TEXT
        self.drag_index = None

    # ==========================================
    #  DRAG GESTURE
    # ==========================================

    def begin_drag(self, index: int) -> bool:
        if not self._valid(index):
            return False
        self.drag_index = index
        return True

    def drag_over(self, index: int) -> bool:
        """
        Called while the pointer is down and hovering stage `index`.

        Swaps the dragged stage into that slot and keeps following it, so
        sweeping across several stages moves it one slot per new target.
        Hovering the slot the stage already occupies does nothing.
        """
        if self.drag_index is None or self.drag_index == index:
            return False
        return self.swap(self.drag_index, index)

    def end_drag(self):
        self.drag_index = None

    # ==========================================
    #  EDIT BATCHES
    # ==========================================

    def apply_requests(self, requests: Iterable[Sequence]) -> int:
        """
        Apply host requests in order, e.g. ("add", "caesar"), ("remove", 0),
        ("reorder", 0, 1) or ("clear",). Returns how many changed the chain.
        """
        applied = 0
        for request in requests:
            if not request:
                continue
            verb, args = request[0], tuple(request[1:])
            try:
                if verb == "add":
                    changed = self.add(*args) is not None
                elif verb == "remove":
                    changed = self.remove(*args)
                elif verb in ("reorder", "swap"):
                    changed = self.swap(*args)
                elif verb == "clear":
                    self.clear()
                    changed = True
                else:
                    log_warn(f"Unknown pipeline request '{verb}' ignored.")
                    changed = False
            except TypeError as e:
                log_warn(f"Malformed pipeline request {request!r}: {e}")
                changed = False
            if changed:
                applied += 1
        return applied

    # ==========================================
    #  EVALUATION
    # ==========================================

    def evaluate(self) -> Evaluation:
        text = self.source_text
        outputs = []
        for stage in self._stages:
            try:
                text = stage.apply(text)
            except Exception as e:
                log_warn(f"Stage '{stage.name}' failed: {e}")
                text = f"[ERROR] {stage.display_name}: {e}"
            outputs.append(text)
        return Evaluation(outputs, text)
