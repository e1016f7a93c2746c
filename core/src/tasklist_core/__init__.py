from tasklist_core.config import CoreConfig, load_core_config
from tasklist_core.home import TasklistPaths, ensure_tasklist_layout, resolve_tasklist_home
from tasklist_core.store import Task, TaskStore
from tasklist_core.views import TaskView, project

__version__ = "0.1.0"

__all__ = [
    "CoreConfig",
    "Task",
    "TaskStore",
    "TaskView",
    "TasklistPaths",
    "__version__",
    "ensure_tasklist_layout",
    "load_core_config",
    "project",
    "resolve_tasklist_home",
]
