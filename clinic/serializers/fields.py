import bleach
from rest_framework import serializers

from clinic.services import in_id_range


class CleanCharField(serializers.CharField):
    """CharField that strips markup from the submitted text."""

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        return bleach.clean(value, tags=set(), strip=True)


class _BlankAsNull:
    # DRF returns '' for blank input before to_internal_value runs.
    def __init__(self, **kwargs):
        kwargs.setdefault('required', False)
        kwargs.setdefault('allow_null', True)
        kwargs.setdefault('allow_blank', True)
        super().__init__(**kwargs)

    def run_validation(self, data=serializers.empty):
        value = super().run_validation(data)
        return value or None


class OptionalCharField(_BlankAsNull, CleanCharField):
    """Nullable text where an empty string is stored as ``None``."""


class OptionalEmailField(_BlankAsNull, serializers.EmailField):
    pass


class ReferenceField(serializers.PrimaryKeyRelatedField):
    """Primary key reference; ids outside the key range are reported as missing."""

    def to_internal_value(self, data):
        try:
            pk = int(data)
        except (TypeError, ValueError):
            return super().to_internal_value(data)
        if not in_id_range(pk):
            self.fail('does_not_exist', pk_value=data)
        return super().to_internal_value(data)
