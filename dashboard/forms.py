import logging
from dataclasses import asdict, dataclass, fields, replace

from choices import Priority, Status

from .api import ApiError

logger = logging.getLogger(__name__)

CREATE_FAILED = "Could not create task"


class _Form:
    """Field-by-name updates and reset to defaults, shared by the dashboard's forms."""

    def update(self, **values):
        known = {f.name for f in fields(self)}
        for name in values:
            if name not in known:
                raise KeyError(f"{type(self).__name__} has no field {name!r}")
        return replace(self, **values)

    def as_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class AuthForm(_Form):
    name: str = ""
    email: str = ""
    password: str = ""


@dataclass(frozen=True)
class TaskForm(_Form):
    title: str = ""
    description: str = ""
    due_date: str = ""
    priority: str = Priority.MEDIUM.value
    status: str = Status.TODO.value

    def as_dict(self):
        data = asdict(self)
        data["dueDate"] = data.pop("due_date")
        return data


class TaskFormController:
    """Holds the create-task form and submits it to the API."""

    def __init__(self, api, task_list, notify):
        self.api = api
        self.task_list = task_list
        self.notify = notify
        self.form = TaskForm()

    def update(self, **values):
        self.form = self.form.update(**values)

    def reset(self):
        self.form = TaskForm()

    def submit(self):
        """Create a task from every form field.

        On success the new task goes to the top of the list and the form is
        reset. On failure the form is kept as typed and the user is told why.
        """
        try:
            task = self.api.create_task(self.form.as_dict())
        except ApiError as e:
            logger.info("Task creation rejected: %s", e)
            self.notify(e.message or CREATE_FAILED)
            return None

        self.task_list.prepend(task)
        self.reset()
        return task
