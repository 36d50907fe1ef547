from marshmallow import fields, validate, EXCLUDE
from lbnamer.types.base import BaseSchema
from lbnamer.types.models.namer_config import NamerConfig

#: Cloud resource names only allow lowercase alphanumerics and '-'.
NAME_TOKEN_PATTERN = r"^[a-z0-9-]*$"


class NamerConfigSchema(BaseSchema):
    """Data of the cluster UID config map."""

    __model__ = NamerConfig

    class Meta:
        unknown = EXCLUDE

    uid = fields.Str(
        data_key="uid",
        required=True,
        validate=validate.Regexp(
            NAME_TOKEN_PATTERN,
            error="Cluster UID may only contain lowercase alphanumerics and '-'.",
        ),
    )
    provider_uid = fields.Str(
        data_key="provider-uid",
        load_default=None,
        allow_none=True,
        validate=validate.Regexp(
            NAME_TOKEN_PATTERN,
            error="Provider UID may only contain lowercase alphanumerics and '-'.",
        ),
    )
