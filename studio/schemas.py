# studio/schemas.py

from marshmallow import Schema, fields, pre_load, validate, EXCLUDE

from .utils.constants import ProjectStatus, DeliverableType

class MessageSchema(Schema):
    message = fields.Str(required=True)

class SuccessSchema(Schema):
    success = fields.Bool(required=True)
    id = fields.Str()

class ProfileSummarySchema(Schema):
    """Schema for serializing the public parts of a profile."""
    id = fields.Str(dump_only=True)
    full_name = fields.Str(dump_only=True)
    email = fields.Str(dump_only=True)
    role = fields.Str(dump_only=True)
    company_name = fields.Str(dump_only=True)
    avatar_url = fields.Str(dump_only=True)
    created_at = fields.DateTime(dump_only=True)

class DeliverableSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    id = fields.Str(dump_only=True)
    phase_id = fields.Str(dump_only=True)
    name = fields.Str(required=True)
    type = fields.Str(allow_none=True, validate=validate.OneOf(DeliverableType.ALL))
    url = fields.Str(allow_none=True)
    description = fields.Str(allow_none=True)
    created_at = fields.DateTime(dump_only=True)

class PhaseSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    id = fields.Str(dump_only=True)
    project_id = fields.Str(dump_only=True)
    name = fields.Str(required=True)
    status = fields.Str(allow_none=True, validate=validate.OneOf(ProjectStatus.ALL))
    description = fields.Str(allow_none=True)
    completed_date = fields.Date(allow_none=True)
    order_index = fields.Int(allow_none=True)
    deliverables = fields.List(fields.Nested(DeliverableSchema), load_default=list)

    @pre_load
    def accept_camel_case(self, data, **kwargs):
        data = dict(data)
        if 'completedDate' in data and 'completed_date' not in data:
            data['completed_date'] = data.pop('completedDate')
        if 'orderIndex' in data and 'order_index' not in data:
            data['order_index'] = data.pop('orderIndex')
        return data

class ProjectInputSchema(Schema):
    """Schema for validating the payload that creates or updates a project."""
    class Meta:
        unknown = EXCLUDE

    id = fields.Str(allow_none=True)
    # Presence is checked by the route so a missing name answers 400
    name = fields.Str(allow_none=True)
    description = fields.Str(allow_none=True)
    client = fields.Str(allow_none=True)
    client_id = fields.Str(allow_none=True)
    type = fields.Str(allow_none=True)
    status = fields.Str(allow_none=True, validate=validate.OneOf(ProjectStatus.ALL))
    start_date = fields.Date(allow_none=True)
    due_date = fields.Date(allow_none=True)
    progress = fields.Int(allow_none=True, validate=validate.Range(min=0, max=100))
    is_public = fields.Bool()
    phases = fields.List(fields.Nested(PhaseSchema))

    @pre_load
    def accept_camel_case(self, data, **kwargs):
        data = dict(data)
        for camel, snake in (('startDate', 'start_date'), ('dueDate', 'due_date'),
                             ('clientId', 'client_id'), ('isPublic', 'is_public')):
            if camel in data and snake not in data:
                data[snake] = data.pop(camel)
        if data.get("client_id") == "no_client":
            data["client_id"] = None
        return data

class ProjectSchema(Schema):
    """Schema for serializing a project with its phases and deliverables."""
    id = fields.Str(dump_only=True)
    name = fields.Str(dump_only=True)
    description = fields.Str(dump_only=True)
    client = fields.Str(dump_only=True)
    client_id = fields.Str(dump_only=True)
    client_profile = fields.Nested(ProfileSummarySchema, dump_only=True, allow_none=True)
    type = fields.Str(dump_only=True)
    status = fields.Str(dump_only=True)
    start_date = fields.Date(dump_only=True)
    due_date = fields.Date(dump_only=True)
    progress = fields.Int(dump_only=True)
    is_public = fields.Bool(dump_only=True)
    created_at = fields.DateTime(dump_only=True)
    updated_at = fields.DateTime(dump_only=True)
    phases = fields.List(fields.Nested(PhaseSchema), dump_only=True)

class ProjectListArgsSchema(Schema):
    """Query parameters accepted by the project listing."""
    class Meta:
        unknown = EXCLUDE

    page = fields.Int(load_default=1)
    page_size = fields.Int(data_key='pageSize', load_default=None)
    search = fields.Str(load_default=None)
    status = fields.List(fields.Str(), load_default=list)

class PaginationSchema(Schema):
    page = fields.Int(required=True)
    page_size = fields.Int(data_key='pageSize', required=True)
    total = fields.Int(required=True)
    total_pages = fields.Int(data_key='totalPages', required=True)

class ProjectListSchema(Schema):
    data = fields.List(fields.Nested(ProjectSchema), required=True)
    pagination = fields.Nested(PaginationSchema, required=True)

class ContactSchema(Schema):
    """Schema for validating a contact form submission sent as JSON."""
    class Meta:
        unknown = EXCLUDE

    full_name = fields.Str(required=True, data_key='fullName')
    email = fields.Email(required=True)
    company_name = fields.Str(allow_none=True, data_key='companyName')
    phone_number = fields.Str(allow_none=True, data_key='phoneNumber')
    project_type = fields.Str(required=True, data_key='projectType')
    budget = fields.Str(allow_none=True)
    timeline = fields.Str(allow_none=True)
    project_description = fields.Str(required=True, data_key='projectDescription')
    referral_source = fields.Str(allow_none=True, data_key='referralSource')
