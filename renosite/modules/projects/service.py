import json
import requests
from typing import Any, Dict, List, Optional

from ...core.logging_service import LoggingService


class ProjectServiceError(Exception):
    """Backend rejected a project request or could not be reached."""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class ProjectService:
    """Client for the remote project backend"""

    def __init__(self, base_url: str, token: Optional[str] = None, timeout: int = 15):
        self.base_url = base_url.rstrip('/')
        self.token = token
        self.timeout = timeout

    # ===== Endpoints =====

    @property
    def projects_endpoint(self) -> str:
        return f"{self.base_url}/data/projects"

    @property
    def admin_projects_endpoint(self) -> str:
        return f"{self.base_url}/api/projects"

    @property
    def create_endpoint(self) -> str:
        return f"{self.base_url}/api/projects/create"

    def edit_endpoint(self, project_id) -> str:
        return f"{self.base_url}/api/projects/edit/{project_id}"

    def delete_endpoint(self, project_id) -> str:
        return f"{self.base_url}/api/projects/delete/{project_id}"

    # ===== Helpers =====

    def _headers(self, json_body=True) -> Dict[str, str]:
        headers = {}
        if json_body:
            headers['Content-Type'] = 'application/json'
        if self.token:
            headers['Authorization'] = f"Bearer {self.token}"
        return headers

    def _request(self, method, url, action, **kwargs):
        try:
            res = requests.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            LoggingService.error('projects', f"API Error {action}: {e}", {'url': url})
            raise ProjectServiceError(f"Backend unavailable: {e}") from e

        LoggingService.log_api_call('projects', url, method, res.status_code)

        if not 200 <= res.status_code < 300:
            try:
                message = (res.json() or {}).get('message')
            except (ValueError, AttributeError):
                message = None
            raise ProjectServiceError(message or f"HTTP error! status: {res.status_code}",
                                      status_code=res.status_code)
        return res

    @staticmethod
    def _json(res, action):
        try:
            return res.json()
        except ValueError as e:
            raise ProjectServiceError(f"Invalid response {action}") from e

    @staticmethod
    def _decode_list(value) -> List[Any]:
        """images/tags may come back as JSON-encoded strings"""
        if value is None:
            return []
        if isinstance(value, str):
            if not value.strip():
                return []
            try:
                parsed = json.loads(value)
            except json.JSONDecodeError:
                return [value]
            return parsed if isinstance(parsed, list) else [parsed]
        return list(value)

    @classmethod
    def normalize_project(cls, project: Dict[str, Any]) -> Dict[str, Any]:
        normalized = dict(project)
        normalized['images'] = cls._decode_list(project.get('images'))
        normalized['tags'] = cls._decode_list(project.get('tags'))
        return normalized

    # ===== Operations =====

    def fetch_projects(self) -> List[Dict[str, Any]]:
        """All projects, with images and tags decoded to lists"""
        res = self._request('GET', self.projects_endpoint, 'fetching projects',
                            headers=self._headers())
        data = self._json(res, "fetching projects") or []
        return [self.normalize_project(p) for p in data]

    def fetch_project(self, project_id) -> Optional[Dict[str, Any]]:
        """Single project by id (the backend has no single-item endpoint)"""
        for project in self.fetch_projects():
            if str(project.get('id')) == str(project_id):
                return project
        return None

    def fetch_admin_projects(self) -> List[Dict[str, Any]]:
        """Raw project list from the backend's /api/projects endpoint"""
        res = self._request('GET', self.admin_projects_endpoint, 'fetching admin projects')
        return self._json(res, "fetching admin projects")

    def create_project(self, project_data: Dict[str, Any]) -> Any:
        res = self._request('POST', self.create_endpoint, 'creating project',
                            headers=self._headers(), json=project_data)
        return self._json(res, "creating project")

    def update_project(self, project_id, project_data: Dict[str, Any]) -> Any:
        res = self._request('PUT', self.edit_endpoint(project_id), 'updating project',
                            headers=self._headers(), json=project_data)
        return self._json(res, "updating project")

    def delete_project(self, project_id) -> bool:
        self._request('DELETE', self.delete_endpoint(project_id), 'deleting project',
                      headers=self._headers(json_body=False))
        return True
