from typing import Callable, Optional


class DecisionStats:
    """
    Running telemetry for decisions: time spent and nodes searched.

    An optional sink is called with (elapsed_ms, nodes) after every record,
    e.g. to refresh a status display. It has no effect on play.
    """

    def __init__(self, sink: Optional[Callable[[float, int], None]] = None):
        self.sink = sink
        self.reset()

    def reset(self):
        self.decision_count = 0
        self.total_time = 0.0
        self.nodes_evaluated = 0
        self.last_time = 0.0
        self.last_nodes = 0

    @property
    def avg_decision_time(self) -> float:
        if self.decision_count == 0:
            return 0.0
        return self.total_time / self.decision_count

    def record(self, elapsed_ms: float, nodes: int):
        self.decision_count += 1
        self.total_time += elapsed_ms
        self.nodes_evaluated += nodes
        self.last_time = elapsed_ms
        self.last_nodes = nodes
        if self.sink is not None:
            self.sink(elapsed_ms, nodes)

    def as_dict(self) -> dict:
        return {
            'decisions': self.decision_count,
            'total_time_ms': self.total_time,
            'avg_decision_time_ms': self.avg_decision_time,
            'nodes_evaluated': self.nodes_evaluated,
            'last_decision_time_ms': self.last_time,
            'last_nodes': self.last_nodes,
        }
