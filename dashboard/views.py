from dataclasses import dataclass

from choices import Status

STATUS_COLORS = {
    Status.TODO: "#8884d8",
    Status.IN_PROGRESS: "#82ca9d",
    Status.DONE: "#ffc658",
}

NO_TASKS = "No tasks yet. Start by creating one above."
NO_CHART = "No tasks yet. Create your first task to see the chart."


def summarize(tasks):
    """Count tasks per status. Every status is present, with 0 when unused."""
    counts = {status: 0 for status in Status}
    for task in tasks:
        for status in Status:
            if task.get("status") == status.value:
                counts[status] += 1
    return counts


def status_color(value):
    for status, color in STATUS_COLORS.items():
        if status.value == value:
            return color
    return None


class TaskListView:
    """The in-memory task list, kept in the order the API returned it."""

    def __init__(self, tasks=None):
        self.tasks = list(tasks or [])

    def __len__(self):
        return len(self.tasks)

    def set(self, tasks):
        self.tasks = list(tasks)

    def prepend(self, task):
        self.tasks = [task] + self.tasks

    def replace(self, task):
        # The server's copy wins over whatever the list held
        self.tasks = [task if t["id"] == task["id"] else t for t in self.tasks]

    def remove(self, task_id):
        self.tasks = [t for t in self.tasks if t["id"] != task_id]

    def clear(self):
        self.tasks = []

    def find(self, task_id):
        for task in self.tasks:
            if task["id"] == task_id:
                return task
        return None

    def render(self):
        if not self.tasks:
            return NO_TASKS
        return "\n\n".join(render_task(task) for task in self.tasks)


def render_task(task):
    lines = [f"{task['title']}  [{task['status']}] {status_color(task['status']) or ''}".rstrip()]
    if task.get("description"):
        lines.append(f"  {task['description']}")
    lines.append(f"  Due: {task.get('dueDate') or 'No due date'}")
    lines.append(f"  Priority: {task['priority']}")
    return "\n".join(lines)


@dataclass(frozen=True)
class ChartSegment:
    name: str
    value: int
    color: str
    fraction: float


class StatusSummaryView:
    """Pie-chart data for the task list. Recomputed on every call, holds no state of its own."""

    def __init__(self, task_list):
        self.task_list = task_list

    def segments(self):
        counts = summarize(self.task_list.tasks)
        total = sum(counts.values())
        return [
            ChartSegment(
                name=status.value,
                value=count,
                color=STATUS_COLORS[status],
                fraction=count / total if total else 0.0,
            )
            for status, count in counts.items()
        ]

    def render(self):
        if not self.task_list.tasks:
            return NO_CHART
        return "\n".join(
            f"{s.name:<12} {s.value:>3}  {s.fraction:6.1%}  {s.color}" for s in self.segments()
        )
