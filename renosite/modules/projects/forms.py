"""
Project form state for the create/edit screens.
"""

from datetime import datetime, date

AVAILABLE_TAGS = [
    'residential',
    'commercial',
    'renovation',
    'new construction',
    'sustainable',
    'interior',
    'exterior',
    'historical',
]

COMPLETED_AT_FORMAT = '%Y-%m-%dT%H:%M:%SZ'


def parse_date(value):
    """Accept a date/datetime or an ISO-ish string; blank -> None"""
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    text = str(value).strip()
    if text.endswith('Z'):
        text = text[:-1]
    for fmt in ('%Y-%m-%dT%H:%M:%S', '%Y-%m-%dT%H:%M:%S.%f', '%Y-%m-%d'):
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    raise ValueError(f"Invalid date: {value}")


class ProjectForm:
    """Fields of the project dialog plus the handlers that edit them"""

    FIELDS = ('title', 'description', 'location')

    def __init__(self):
        self.reset()

    def reset(self):
        self.title = ''
        self.description = ''
        self.location = ''
        self.selected_date = None
        self.image_inputs = [{'id': 0, 'value': ''}]
        self.selected_tags = []

    # ===== Handlers =====

    def change(self, field, value):
        if field not in self.FIELDS:
            raise KeyError(f"Unknown form field: {field}")
        setattr(self, field, value if value is not None else '')

    def change_date(self, value):
        self.selected_date = parse_date(value)

    def toggle_tag(self, tag):
        if tag in self.selected_tags:
            self.selected_tags = [t for t in self.selected_tags if t != tag]
        else:
            self.selected_tags = self.selected_tags + [tag]

    def image_inputs_action(self, action, payload=None):
        """add / remove <id> / update {id, value} / set [{id, value}, ...]"""
        if action == 'add':
            # ids follow the list length, as the panel has always done
            self.image_inputs = self.image_inputs + [{'id': len(self.image_inputs), 'value': ''}]
        elif action == 'remove':
            self.image_inputs = [i for i in self.image_inputs if i['id'] != payload]
        elif action == 'update':
            self.image_inputs = [
                {**i, 'value': payload['value']} if i['id'] == payload['id'] else i
                for i in self.image_inputs
            ]
        elif action == 'set':
            self.image_inputs = [dict(i) for i in payload]
        else:
            raise ValueError(f"Unknown image input action: {action}")

    # ===== Conversion =====

    @property
    def images(self):
        return [i['value'].strip() for i in self.image_inputs
                if isinstance(i.get('value'), str) and i['value'].strip()]

    @property
    def completed_at(self):
        if not self.selected_date:
            return None
        return self.selected_date.strftime(COMPLETED_AT_FORMAT)

    def validate(self):
        """Return a list of error messages (empty when valid)"""
        errors = []
        if not self.title.strip():
            errors.append('Title is required')
        if not self.description.strip():
            errors.append('Description is required')
        return errors

    def to_payload(self, project_id=None):
        payload = {
            'title': self.title,
            'description': self.description,
            'images': self.images,
            'tags': list(self.selected_tags),
            'location': self.location,
            'completed_at': self.completed_at,
        }
        if project_id is not None:
            payload = {'id': project_id, **payload}
        return payload

    def to_dict(self):
        return {
            'title': self.title,
            'description': self.description,
            'location': self.location,
            'selected_date': self.selected_date.strftime('%Y-%m-%d') if self.selected_date else '',
            'image_inputs': [dict(i) for i in self.image_inputs],
            'selected_tags': list(self.selected_tags),
        }

    @classmethod
    def from_project(cls, project):
        """Prefill from a backend project record for editing"""
        form = cls()
        form.change('title', project.get('title', ''))
        form.change('description', project.get('description', ''))
        form.change('location', project.get('location') or '')
        for tag in project.get('tags') or []:
            form.toggle_tag(tag)
        if project.get('completed_at'):
            form.change_date(project['completed_at'])
        images = project.get('images') or []
        if images:
            form.image_inputs_action('set', [{'id': idx, 'value': img} for idx, img in enumerate(images)])
        return form

    @classmethod
    def from_request_data(cls, data, multi=None):
        """Build from JSON body or form fields.

        JSON carries `images` and `tags` lists; HTML forms send repeated
        `images`/`tags` fields, read through *multi* (request.form.getlist).
        """
        form = cls()
        for field in cls.FIELDS:
            value = data.get(field) or ''
            form.change(field, value.strip() if isinstance(value, str) else str(value))

        form.change_date(data.get('completed_at') or data.get('selected_date') or None)

        if multi is not None:
            images = multi('images')
            tags = multi('tags')
        else:
            images = data.get('images') or []
            tags = data.get('tags') or []

        for tag in tags:
            if tag not in form.selected_tags:
                form.toggle_tag(tag)
        if images:
            form.image_inputs_action('set', [{'id': idx, 'value': img} for idx, img in enumerate(images)])
        return form
