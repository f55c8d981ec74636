"""
Recent projects list.

Process-wide state with an explicit lifecycle: `load_or_seed` reads the JSON
file, or seeds two example projects and writes them on first use. Sessions
get the list injected and record the prompt that started each project.
"""

import json
from datetime import datetime, timedelta
from pathlib import Path
from typing import List, Optional, Union

from promptide.core.logging_config import logger
from promptide.workspace.models import RecentProject

MAX_RECENT_PROJECTS = 20


def default_recent_projects(now: Optional[datetime] = None) -> List[RecentProject]:
    now = now or datetime.now()
    return [
        RecentProject(
            id="1",
            name="Calculator App",
            description="Modern calculator with keyboard support",
            last_modified=now - timedelta(minutes=30),
        ),
        RecentProject(
            id="2",
            name="Todo List App",
            description="Task management with local storage",
            last_modified=now - timedelta(hours=2),
        ),
    ]


class RecentProjects:
    def __init__(self, projects: Optional[List[RecentProject]] = None,
                 path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path is not None else None
        self._projects: List[RecentProject] = list(projects or [])

    @classmethod
    def load_or_seed(cls, path: Union[str, Path]) -> "RecentProjects":
        """Load the saved list; a missing or unreadable file gets the defaults"""
        path = Path(path)
        if path.exists():
            try:
                with open(path) as f:
                    data = json.load(f)
                projects = [RecentProject.from_dict(item) for item in data]
                return cls(projects, path)
            except (OSError, ValueError, KeyError, TypeError) as e:
                logger.warning(f"[RecentProjects] Ignoring unreadable {path}: {type(e).__name__}: {e}")

        recent = cls(default_recent_projects(), path)
        recent.save()
        return recent

    def all(self) -> List[RecentProject]:
        """Most recently modified first"""
        return sorted(self._projects, key=lambda p: p.last_modified, reverse=True)

    def get(self, project_id: str) -> Optional[RecentProject]:
        for project in self._projects:
            if project.id == project_id:
                return project
        return None

    def record(self, project_id: str, name: str, description: str = "") -> RecentProject:
        """
        Add or touch a project. The first description sticks: it is the
        prompt the project was started with.
        """
        project = self.get(project_id)
        if project is None:
            project = RecentProject(id=project_id, name=name, description=description)
            self._projects.append(project)
        else:
            project.name = name
            project.last_modified = datetime.now()
            if not project.description:
                project.description = description

        self._projects = self.all()[:MAX_RECENT_PROJECTS]
        self.save()
        return project

    def save(self) -> None:
        if self.path is None:
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w") as f:
                json.dump([p.to_dict() for p in self._projects], f, indent=2)
        except OSError as e:
            logger.warning(f"[RecentProjects] Could not save {self.path}: {e}")

    def __len__(self) -> int:
        return len(self._projects)
