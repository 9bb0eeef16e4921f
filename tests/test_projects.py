"""
Tests for the projects module: backend client, form state, panel state and the
admin routes.
"""

from unittest.mock import patch

import pytest
import requests

from renosite.modules.projects import (
    AVAILABLE_TAGS,
    ProjectForm,
    ProjectPanel,
    ProjectService,
    ProjectServiceError,
)
from renosite.modules.projects.forms import parse_date

REQUEST = 'renosite.modules.projects.service.requests.request'
BACKEND = 'http://backend.test'


def _projects(count, completed_every=2):
    return [
        {
            'id': i,
            'title': f"Project {i}",
            'description': f"Description {i}",
            'images': [f"p{i}.jpg"],
            'tags': ['residential'],
            'completed_at': '2024-01-05T00:00:00Z' if i % completed_every == 0 else None,
        }
        for i in range(1, count + 1)
    ]


class FakeService:
    """In-memory stand-in for ProjectService used by the panel tests"""

    def __init__(self, projects=None, fail_with=None):
        self.projects = list(projects or [])
        self.fail_with = fail_with
        self.calls = []

    def fetch_projects(self):
        self.calls.append(('fetch',))
        if self.fail_with:
            raise ProjectServiceError(self.fail_with)
        return list(self.projects)

    def create_project(self, payload):
        self.calls.append(('create', payload))
        if self.fail_with:
            raise ProjectServiceError(self.fail_with)
        return {'id': 99}

    def update_project(self, project_id, payload):
        self.calls.append(('update', project_id, payload))
        if self.fail_with:
            raise ProjectServiceError(self.fail_with)
        return payload

    def delete_project(self, project_id):
        self.calls.append(('delete', project_id))
        if self.fail_with:
            raise ProjectServiceError(self.fail_with)
        return True


# ===== ProjectService =====

class TestProjectService:

    def test_fetch_projects_decodes_json_string_fields(self, app, fake_response):
        backend = [{'id': 1, 'images': '["a.jpg", "b.jpg"]', 'tags': '["kitchen"]'},
                   {'id': 2, 'images': None, 'tags': ['deck']}]
        with patch(REQUEST, return_value=fake_response(200, json_body=backend)) as mock_request:
            projects = ProjectService(BACKEND).fetch_projects()

        assert projects[0]['images'] == ['a.jpg', 'b.jpg']
        assert projects[0]['tags'] == ['kitchen']
        assert projects[1]['images'] == []
        assert projects[1]['tags'] == ['deck']
        assert mock_request.call_args.args == ('GET', 'http://backend.test/data/projects')
        assert mock_request.call_args.kwargs['timeout'] == 15

    def test_fetch_project_by_id(self, app, fake_response):
        with patch(REQUEST, return_value=fake_response(200, json_body=[{'id': 1}, {'id': 7}])):
            assert ProjectService(BACKEND).fetch_project(7)['id'] == 7
            assert ProjectService(BACKEND).fetch_project(8) is None

    def test_create_sends_token_and_payload(self, app, fake_response):
        with patch(REQUEST, return_value=fake_response(200, json_body={'id': 3})) as mock_request:
            result = ProjectService(BACKEND, token='tok').create_project({'title': 'Deck'})

        assert result == {'id': 3}
        args, kwargs = mock_request.call_args
        assert args == ('POST', 'http://backend.test/api/projects/create')
        assert kwargs['json'] == {'title': 'Deck'}
        assert kwargs['headers']['Authorization'] == 'Bearer tok'
        assert kwargs['headers']['Content-Type'] == 'application/json'

    def test_update_and_delete_endpoints(self, app, fake_response):
        with patch(REQUEST, return_value=fake_response(200, json_body={})) as mock_request:
            service = ProjectService(BACKEND + '/', token='tok')
            service.update_project(4, {'id': 4})
            assert mock_request.call_args.args == ('PUT', 'http://backend.test/api/projects/edit/4')
            assert service.delete_project(4) is True
            assert mock_request.call_args.args == ('DELETE', 'http://backend.test/api/projects/delete/4')
            assert 'Content-Type' not in mock_request.call_args.kwargs['headers']

    def test_no_token_no_authorization_header(self, app, fake_response):
        with patch(REQUEST, return_value=fake_response(200, json_body=[])) as mock_request:
            ProjectService(BACKEND).fetch_projects()
        assert 'Authorization' not in mock_request.call_args.kwargs['headers']

    def test_backend_error_message_is_used(self, app, fake_response):
        with patch(REQUEST, return_value=fake_response(400, json_body={'message': 'Title taken'})):
            with pytest.raises(ProjectServiceError) as exc:
                ProjectService(BACKEND).create_project({})
        assert str(exc.value) == 'Title taken'
        assert exc.value.status_code == 400

    def test_backend_error_without_message(self, app, fake_response):
        with patch(REQUEST, return_value=fake_response(500, content=b'<html>oops</html>')):
            with pytest.raises(ProjectServiceError) as exc:
                ProjectService(BACKEND).fetch_projects()
        assert str(exc.value) == 'HTTP error! status: 500'
        assert exc.value.status_code == 500

    def test_transport_error(self, app):
        with patch(REQUEST, side_effect=requests.ConnectionError('refused')):
            with pytest.raises(ProjectServiceError) as exc:
                ProjectService(BACKEND).fetch_projects()
        assert exc.value.status_code is None


# ===== ProjectForm =====

class TestProjectForm:

    def test_defaults(self):
        form = ProjectForm()
        assert form.title == ''
        assert form.image_inputs == [{'id': 0, 'value': ''}]
        assert form.selected_tags == []
        assert form.completed_at is None

    def test_unknown_field(self):
        with pytest.raises(KeyError):
            ProjectForm().change('budget', '10')

    def test_toggle_tag(self):
        form = ProjectForm()
        form.toggle_tag('interior')
        form.toggle_tag('exterior')
        form.toggle_tag('interior')
        assert form.selected_tags == ['exterior']

    def test_image_inputs_actions(self):
        form = ProjectForm()
        form.image_inputs_action('add')
        form.image_inputs_action('update', {'id': 1, 'value': 'b.jpg'})
        form.image_inputs_action('update', {'id': 0, 'value': 'a.jpg'})
        assert form.images == ['a.jpg', 'b.jpg']

        form.image_inputs_action('remove', 0)
        assert form.image_inputs == [{'id': 1, 'value': 'b.jpg'}]

        form.image_inputs_action('set', [{'id': 0, 'value': 'c.jpg'}])
        assert form.images == ['c.jpg']

        with pytest.raises(ValueError):
            form.image_inputs_action('shuffle')

    def test_payload(self):
        form = ProjectForm()
        form.change('title', 'Kitchen')
        form.change('description', 'New cabinets')
        form.change_date('2024-03-01')
        form.toggle_tag('interior')
        form.image_inputs_action('set', [{'id': 0, 'value': ' a.jpg '}, {'id': 1, 'value': ''}])

        assert form.to_payload() == {
            'title': 'Kitchen',
            'description': 'New cabinets',
            'images': ['a.jpg'],
            'tags': ['interior'],
            'location': '',
            'completed_at': '2024-03-01T00:00:00Z',
        }
        assert list(form.to_payload(project_id=5))[0] == 'id'

    def test_validate(self):
        form = ProjectForm()
        assert form.validate() == ['Title is required', 'Description is required']
        form.change('title', 'x')
        form.change('description', '   ')
        assert form.validate() == ['Description is required']

    def test_reset(self):
        form = ProjectForm()
        form.change('title', 'x')
        form.toggle_tag('interior')
        form.reset()
        assert form.title == ''
        assert form.selected_tags == []

    def test_from_project(self):
        form = ProjectForm.from_project({
            'title': 'Deck', 'description': 'Cedar deck', 'location': None,
            'tags': ['exterior'], 'images': ['a.jpg', 'b.jpg'],
            'completed_at': '2023-07-04T00:00:00Z',
        })
        data = form.to_dict()
        assert data['title'] == 'Deck'
        assert data['location'] == ''
        assert data['selected_date'] == '2023-07-04'
        assert data['selected_tags'] == ['exterior']
        assert [i['value'] for i in data['image_inputs']] == ['a.jpg', 'b.jpg']

    def test_from_request_data_json(self):
        form = ProjectForm.from_request_data({
            'title': '  Porch ', 'description': 'Screened porch',
            'images': ['p.jpg'], 'tags': ['exterior', 'exterior'],
            'completed_at': '2022-10-01',
        })
        assert form.title == 'Porch'
        assert form.selected_tags == ['exterior']
        assert form.images == ['p.jpg']
        assert form.completed_at == '2022-10-01T00:00:00Z'

    def test_from_request_data_bad_date(self):
        with pytest.raises(ValueError):
            ProjectForm.from_request_data({'title': 'x', 'completed_at': 'yesterday'})

    def test_parse_date(self):
        assert parse_date('') is None
        assert parse_date('2024-01-05T10:30:00Z').hour == 10
        assert parse_date('2024-01-05T10:30:00.123Z').minute == 30

    def test_available_tags(self):
        assert 'new construction' in AVAILABLE_TAGS


# ===== ProjectPanel =====

class TestProjectPanel:

    def test_pagination(self, app):
        panel = ProjectPanel(FakeService(_projects(12)), items_per_page=5)
        panel.load()
        assert panel.total_pages == 3
        assert [p['id'] for p in panel.displayed(1)] == [1, 2, 3, 4, 5]
        assert [p['id'] for p in panel.displayed(3)] == [11, 12]
        assert panel.clamp_page(99) == 3
        assert panel.clamp_page('abc') == 1
        assert panel.clamp_page(0) == 1

    def test_empty_panel(self, app):
        panel = ProjectPanel(FakeService([]))
        panel.load()
        assert panel.total_pages == 0
        assert panel.displayed(1) == []
        assert panel.clamp_page(4) == 1

    def test_stats_and_recent(self, app):
        panel = ProjectPanel(FakeService(_projects(5)))
        panel.load()
        assert panel.stats == {'total': 5, 'completed': 2, 'in_progress': 3}
        assert [p['id'] for p in panel.recent()] == [1, 2, 3]

    def test_load_error(self, app):
        panel = ProjectPanel(FakeService(fail_with='Backend unavailable'))
        panel.load()
        assert panel.error == 'Backend unavailable'
        assert panel.projects is None
        assert panel.loading is False

    def test_create_success_reloads(self, app):
        service = FakeService(_projects(1))
        panel = ProjectPanel(service)
        form = ProjectForm.from_request_data({'title': 'A', 'description': 'B'})

        assert panel.create(form) is True
        assert panel.api_status == {'loading': False, 'success': True,
                                    'message': 'Project created successfully!'}
        assert service.calls[0][0] == 'create'
        assert service.calls[-1] == ('fetch',)

    def test_create_failure(self, app):
        panel = ProjectPanel(FakeService(fail_with='Title taken'))
        assert panel.create(ProjectForm()) is False
        assert panel.api_status['success'] is False
        assert panel.api_status['message'] == 'Title taken'

    def test_update_sends_id(self, app):
        service = FakeService()
        panel = ProjectPanel(service)
        form = ProjectForm.from_request_data({'title': 'A', 'description': 'B'})
        assert panel.update(4, form) is True
        assert service.calls[0][2]['id'] == 4
        assert panel.api_status['message'] == 'Project updated successfully!'

    def test_update_and_delete_without_id(self, app):
        service = FakeService()
        panel = ProjectPanel(service)
        assert panel.update(None, ProjectForm()) is False
        assert panel.delete(None) is False
        assert service.calls == []

    def test_delete(self, app):
        panel = ProjectPanel(FakeService())
        assert panel.delete(2) is True
        assert panel.api_status['message'] == 'Project deleted successfully!'


# ===== Routes =====

class TestProjectRoutes:

    def test_panel_requires_login(self, client):
        response = client.get('/admin/projects/')
        assert response.status_code == 302
        assert '/admin/login' in response.headers['Location']

    def test_admin_api_requires_login(self, client):
        response = client.get('/api/admin/projects')
        assert response.status_code == 401
        assert response.get_json() == {'error': 'Authentication required'}

    def test_panel_renders_projects(self, admin_client, fake_response):
        with patch(REQUEST, return_value=fake_response(200, json_body=_projects(7))):
            response = admin_client.get('/admin/projects/?page=2')

        assert response.status_code == 200
        html = response.get_data(as_text=True)
        assert 'Project 6' in html
        assert 'Page 2 of 2' in html
        assert 'data-candidates' in html

    def test_panel_shows_backend_error(self, admin_client):
        with patch(REQUEST, side_effect=requests.ConnectionError('refused')):
            response = admin_client.get('/admin/projects/')
        assert response.status_code == 200
        assert 'Error loading projects' in response.get_data(as_text=True)

    def test_create_form_page(self, admin_client):
        response = admin_client.get('/admin/projects/new')
        assert response.status_code == 200
        assert 'new construction' in response.get_data(as_text=True)

    def test_create_via_html_form(self, admin_client, fake_response):
        responses = [fake_response(200, json_body={'id': 1}), fake_response(200, json_body=[])]
        with patch(REQUEST, side_effect=responses) as mock_request:
            response = admin_client.post('/admin/projects/new', data={
                'title': 'Bathroom', 'description': 'Tile work',
                'images': ['a.jpg', ''], 'tags': ['interior'],
                'completed_at': '2024-02-02',
            })

        assert response.status_code == 302
        payload = mock_request.call_args_list[0].kwargs['json']
        assert payload['images'] == ['a.jpg']
        assert payload['tags'] == ['interior']
        assert payload['completed_at'] == '2024-02-02T00:00:00Z'

    def test_create_via_html_form_invalid(self, admin_client):
        with patch(REQUEST) as mock_request:
            response = admin_client.post('/admin/projects/new', data={'title': '', 'description': ''})
        assert response.status_code == 400
        assert 'Title is required' in response.get_data(as_text=True)
        mock_request.assert_not_called()

    def test_create_via_html_form_bad_date(self, admin_client):
        with patch(REQUEST) as mock_request:
            response = admin_client.post('/admin/projects/new', data={
                'title': 'x', 'description': 'y', 'completed_at': 'soon'})
        assert response.status_code == 400
        mock_request.assert_not_called()

    def test_edit_page_missing_project(self, admin_client, fake_response):
        with patch(REQUEST, return_value=fake_response(200, json_body=[])):
            assert admin_client.get('/admin/projects/5/edit').status_code == 404

    def test_edit_page_prefills(self, admin_client, fake_response):
        with patch(REQUEST, return_value=fake_response(200, json_body=_projects(2))):
            response = admin_client.get('/admin/projects/2/edit')
        assert response.status_code == 200
        assert 'Project 2' in response.get_data(as_text=True)

    def test_json_create(self, admin_client, fake_response):
        responses = [fake_response(200, json_body={'id': 1}), fake_response(200, json_body=[])]
        with patch(REQUEST, side_effect=responses) as mock_request:
            response = admin_client.post('/admin/projects/api/projects', json={
                'title': 'Roof', 'description': 'New shingles', 'completed_at': '2024-05-01'})

        assert response.status_code == 201
        assert response.get_json()['message'] == 'Project created successfully!'
        first = mock_request.call_args_list[0]
        assert first.args == ('POST', 'http://backend.test/api/projects/create')
        assert first.kwargs['headers']['Authorization'] == 'Bearer test-token'
        assert first.kwargs['json']['completed_at'] == '2024-05-01T00:00:00Z'

    def test_json_create_validation(self, admin_client):
        with patch(REQUEST) as mock_request:
            response = admin_client.post('/admin/projects/api/projects', json={'title': 'Roof'})
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Description is required'
        mock_request.assert_not_called()

    def test_string_project_ids(self, admin_client, fake_response):
        projects = [{'id': 'a1b2', 'title': 'Attic', 'description': 'Insulation'}]
        with patch(REQUEST, return_value=fake_response(200, json_body=projects)) as mock_request:
            edit = admin_client.get('/admin/projects/a1b2/edit')
            admin_client.delete('/admin/projects/api/projects/a1b2')

        assert edit.status_code == 200
        assert 'Attic' in edit.get_data(as_text=True)
        assert ('DELETE', 'http://backend.test/api/projects/delete/a1b2') in [
            c.args for c in mock_request.call_args_list]

    def test_json_update(self, admin_client, fake_response):
        responses = [fake_response(200, json_body={}), fake_response(200, json_body=[])]
        with patch(REQUEST, side_effect=responses) as mock_request:
            response = admin_client.put('/admin/projects/api/projects/3',
                                        json={'title': 'a', 'description': 'b'})
        assert response.status_code == 200
        assert mock_request.call_args_list[0].kwargs['json']['id'] == '3'

    def test_json_delete_failure(self, admin_client, fake_response):
        with patch(REQUEST, return_value=fake_response(404, json_body={'message': 'Not found'})):
            response = admin_client.delete('/admin/projects/api/projects/3')
        assert response.status_code == 502
        assert response.get_json() == {'error': 'Not found'}

    def test_html_delete(self, admin_client, fake_response):
        responses = [fake_response(200, json_body={}), fake_response(200, json_body=[])]
        with patch(REQUEST, side_effect=responses) as mock_request:
            response = admin_client.post('/admin/projects/3/delete')
        assert response.status_code == 302
        assert mock_request.call_args_list[0].args == ('DELETE', 'http://backend.test/api/projects/delete/3')

    def test_admin_passthrough(self, admin_client, fake_response):
        with patch(REQUEST, return_value=fake_response(200, json_body=[{'id': 1}])) as mock_request:
            response = admin_client.get('/api/admin/projects')
        assert response.status_code == 200
        assert response.get_json() == [{'id': 1}]
        assert mock_request.call_args.args == ('GET', 'http://backend.test/api/projects')

    def test_admin_passthrough_http_error(self, admin_client, fake_response):
        with patch(REQUEST, return_value=fake_response(503)):
            response = admin_client.get('/api/admin/projects')
        assert response.status_code == 500
        assert response.get_data(as_text=True) == 'HTTP error! Status: 503'

    def test_admin_passthrough_transport_error(self, admin_client):
        with patch(REQUEST, side_effect=requests.ConnectionError('refused')):
            response = admin_client.get('/api/admin/projects')
        assert response.status_code == 500
        assert response.get_json() == {'error': 'Failed to fetch projects'}


def test_service_invalid_json_body(app, fake_response):
    with patch(REQUEST, return_value=fake_response(200, content=b'not json')):
        with pytest.raises(ProjectServiceError, match='Invalid response fetching projects'):
            ProjectService(BACKEND).fetch_projects()
