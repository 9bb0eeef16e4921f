"""
Admin panel state: the loaded project list, pagination, stats and the
create/update/delete actions with their status message.
"""

import math

from .service import ProjectServiceError
from ...core.logging_service import LoggingService


class ProjectPanel:

    def __init__(self, service, items_per_page=5):
        self.service = service
        self.items_per_page = items_per_page
        self.projects = None
        self.loading = False
        self.error = None
        self.api_status = {'loading': False, 'success': None, 'message': ''}

    # ===== Loading =====

    def load(self):
        self.loading = True
        try:
            self.projects = self.service.fetch_projects()
            self.error = None
        except ProjectServiceError as e:
            self.error = str(e)
            LoggingService.error('projects', f"Error fetching projects: {e}")
        finally:
            self.loading = False
        return self.projects

    # ===== Pagination =====

    @property
    def total_pages(self):
        if not self.projects:
            return 0
        return math.ceil(len(self.projects) / self.items_per_page)

    def clamp_page(self, page):
        try:
            page = int(page)
        except (TypeError, ValueError):
            page = 1
        return max(1, min(page, self.total_pages or 1))

    def displayed(self, page):
        if not self.projects:
            return []
        page = self.clamp_page(page)
        start = (page - 1) * self.items_per_page
        return self.projects[start:start + self.items_per_page]

    # ===== Stats =====

    @property
    def stats(self):
        projects = self.projects or []
        completed = sum(1 for p in projects if p.get('completed_at'))
        return {
            'total': len(projects),
            'completed': completed,
            'in_progress': len(projects) - completed,
        }

    def recent(self, count=3):
        return (self.projects or [])[:count]

    # ===== Actions =====

    def _run(self, action, success_message, failure_message):
        self.api_status = {'loading': True, 'success': None, 'message': ''}
        try:
            action()
        except ProjectServiceError as e:
            LoggingService.error('projects', f"{failure_message}: {e}")
            self.api_status = {'loading': False, 'success': False,
                               'message': str(e) or failure_message}
            return False

        self.load()
        self.api_status = {'loading': False, 'success': True, 'message': success_message}
        return True

    def create(self, form):
        return self._run(lambda: self.service.create_project(form.to_payload()),
                         'Project created successfully!', 'Failed to create project')

    def update(self, project_id, form):
        if project_id is None:
            return False
        return self._run(lambda: self.service.update_project(project_id, form.to_payload(project_id)),
                         'Project updated successfully!', 'Failed to update project')

    def delete(self, project_id):
        if project_id is None:
            return False
        return self._run(lambda: self.service.delete_project(project_id),
                         'Project deleted successfully!', 'Failed to delete project')
