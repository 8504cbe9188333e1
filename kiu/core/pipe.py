"""Pipe — linear stage runner for the attribution pipeline."""

import time


class Pipe:
    """
    Chains pipeline stages. Output of one stage feeds the next:
    extract -> profile -> split -> train -> evaluate.

    Each stage is a function that takes input and returns output.
    """

    def __init__(self, on_stage=None):
        self.stages = []
        self.log = []
        self.on_stage = on_stage

    def add(self, name, fn, summary=None):
        """Add a stage. fn: takes input, returns output.

        summary: optional fn(output) -> str recorded in the log instead of
        str(output).
        """
        self.stages.append((name, fn, summary))
        return self

    def run(self, initial_input):
        """Run every stage in order and return the last output."""
        data = initial_input
        for name, fn, summary in self.stages:
            if self.on_stage is not None:
                self.on_stage(name)
            start = time.perf_counter()
            data = fn(data)
            self.log.append({
                'stage': name,
                'output': (summary(data) if summary else str(data))[:200],
                'elapsed': time.perf_counter() - start,
            })
        return data

    def elapsed(self):
        """Total seconds spent in logged stages."""
        return sum(entry['elapsed'] for entry in self.log)
