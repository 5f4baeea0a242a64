import logging

from .api import ApiError
from .forms import AuthForm, TaskFormController
from .views import StatusSummaryView, TaskListView

logger = logging.getLogger(__name__)

LOGIN = "login"
REGISTER = "register"

LOGIN_FAILED = "Login failed"
REGISTER_FAILED = "Registration failed"
UPDATE_FAILED = "Could not update task"
DELETE_FAILED = "Could not delete task"
DELETE_PROMPT = "Delete this task?"


def ask_confirmation(prompt):
    return input(f"{prompt} [y/N] ").strip().lower() in ("y", "yes")


class Dashboard:
    """
    The task manager client: auth screen while logged out, tasks once logged in.

    `notify` shows a message to the user, `confirm` asks a yes/no question.
    Every action sends at most one request and only changes the task list
    after the server answered.
    """

    def __init__(self, api, session, notify=print, confirm=ask_confirmation):
        self.api = api
        self.session = session
        self.notify = notify
        self.confirm = confirm

        self.auth_mode = LOGIN
        self.auth_form = AuthForm()
        self.task_list = TaskListView()
        self.task_form = TaskFormController(api, self.task_list, notify)
        self.summary_view = StatusSummaryView(self.task_list)

    def start(self):
        """Restore a saved session, loading its tasks."""
        if self.session.hydrate():
            self.fetch_tasks()

    # ---- session ----

    def switch_auth_mode(self, mode):
        if mode not in (LOGIN, REGISTER):
            raise ValueError(f"Unknown auth mode {mode!r}")
        self.auth_mode = mode

    def update_auth_form(self, **values):
        self.auth_form = self.auth_form.update(**values)

    def submit_auth(self):
        return self.login() if self.auth_mode == LOGIN else self.register()

    def login(self):
        try:
            data = self.api.login(self.auth_form.email, self.auth_form.password)
        except ApiError as e:
            self.notify(e.message or LOGIN_FAILED)
            return False
        self._authenticated(data)
        return True

    def register(self):
        form = self.auth_form
        try:
            data = self.api.register(form.name, form.email, form.password)
        except ApiError as e:
            self.notify(e.message or REGISTER_FAILED)
            return False
        self._authenticated(data)
        return True

    def _authenticated(self, data):
        self.session.start(data["user"], data["token"])
        self.auth_form = AuthForm()
        logger.info("Logged in as user %s", data["user"].get("id"))
        self.fetch_tasks()

    def logout(self):
        self.session.clear()
        self.task_list.clear()

    # ---- tasks ----

    def fetch_tasks(self):
        try:
            tasks = self.api.list_tasks()
        except ApiError as e:
            logger.error("Could not load tasks: %s", e)
            return False
        self.task_list.set(tasks)
        return True

    def update_task_form(self, **values):
        self.task_form.update(**values)

    def create_task(self):
        return self.task_form.submit()

    def update_task(self, task_id, updates):
        try:
            task = self.api.update_task(task_id, updates)
        except ApiError as e:
            logger.info("Update of task %s failed: %s", task_id, e)
            self.notify(UPDATE_FAILED)
            return None
        self.task_list.replace(task)
        return task

    def change_status(self, task_id, status):
        return self.update_task(task_id, {"status": status})

    def delete_task(self, task_id):
        if not self.confirm(DELETE_PROMPT):
            return False
        try:
            self.api.delete_task(task_id)
        except ApiError as e:
            logger.info("Delete of task %s failed: %s", task_id, e)
            self.notify(DELETE_FAILED)
            return False
        self.task_list.remove(task_id)
        return True

    # ---- rendering ----

    def summary(self):
        return self.summary_view.segments()

    def render(self):
        if not self.session.is_authenticated:
            title = "Log In" if self.auth_mode == LOGIN else "Register"
            return f"Task Manager\nRegister or log in to manage your tasks.\n[{title}]"

        name = (self.session.user or {}).get("name") or "User"
        return "\n\n".join([
            "Task Manager Dashboard",
            f"Welcome, {name}!",
            "Task Status Overview\n" + self.summary_view.render(),
            "Your Tasks\n" + self.task_list.render(),
        ])
