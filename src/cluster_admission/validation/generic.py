"""Default checks for the collaborators the cluster validator delegates to.

Each check has the signature ``(value, FieldPath) -> ErrorList``. Callers
that own richer implementations (object metadata, image policy, ...) pass
their own through :class:`ExternalValidators`.
"""

import re
from dataclasses import dataclass
from typing import Any, Callable

from cluster_admission.models import ClusterConfig, ImageSpec, ObjectMeta, PersistenceConfig

from .field import ErrorList, FieldPath, invalid, required

DNS1123_LABEL_FMT = r"[a-z0-9]([-a-z0-9]*[a-z0-9])?"
DNS1123_SUBDOMAIN_FMT = DNS1123_LABEL_FMT + r"(\." + DNS1123_LABEL_FMT + r")*"
DNS1123_LABEL_MAX_LENGTH = 63
DNS1123_SUBDOMAIN_MAX_LENGTH = 253

_dns1123_label_re = re.compile(DNS1123_LABEL_FMT)
_dns1123_subdomain_re = re.compile(DNS1123_SUBDOMAIN_FMT)

Check = Callable[[Any, FieldPath], ErrorList]


def _max_len_message(length: int) -> str:
    return f"must be no more than {length} characters"


def validate_dns1123_subdomain(value: str, path: FieldPath) -> ErrorList:
    """Check a name is a lowercase RFC 1123 subdomain."""
    errors: ErrorList = []
    if len(value) > DNS1123_SUBDOMAIN_MAX_LENGTH:
        errors.append(invalid(path, value, _max_len_message(DNS1123_SUBDOMAIN_MAX_LENGTH)))
    if not _dns1123_subdomain_re.fullmatch(value):
        errors.append(
            invalid(
                path,
                value,
                "a lowercase RFC 1123 subdomain must consist of lower case alphanumeric "
                "characters, '-' or '.', and must start and end with an alphanumeric "
                "character (e.g. 'example.com', regex used for validation is "
                f"'{DNS1123_SUBDOMAIN_FMT}')",
            )
        )
    return errors


def validate_dns1123_label(value: str, path: FieldPath) -> ErrorList:
    """Check a name is a lowercase RFC 1123 label."""
    errors: ErrorList = []
    if len(value) > DNS1123_LABEL_MAX_LENGTH:
        errors.append(invalid(path, value, _max_len_message(DNS1123_LABEL_MAX_LENGTH)))
    if not _dns1123_label_re.fullmatch(value):
        errors.append(
            invalid(
                path,
                value,
                "a lowercase RFC 1123 label must consist of lower case alphanumeric "
                "characters or '-', and must start and end with an alphanumeric "
                "character (e.g. 'my-name', or '123-abc', regex used for validation is "
                f"'{DNS1123_LABEL_FMT}')",
            )
        )
    return errors


def validate_object_meta(meta: ObjectMeta, path: FieldPath) -> ErrorList:
    """Check the metadata of a namespaced object.

    Only presence and name formats are checked; labels and annotations are
    left to the orchestrator.
    """
    errors: ErrorList = []
    if not meta.name and not meta.generate_name:
        errors.append(required(path.child("name"), "name or generateName is required"))
    if meta.name:
        errors.extend(validate_dns1123_subdomain(meta.name, path.child("name")))

    namespace_path = path.child("namespace")
    if not meta.namespace:
        errors.append(required(namespace_path, ""))
    else:
        errors.extend(validate_dns1123_label(meta.namespace, namespace_path))
    return errors


def validate_persistence_config(persistence: PersistenceConfig, path: FieldPath) -> ErrorList:
    # Presence only; volume contents are not validated.
    return []


def validate_image_spec(image: ImageSpec, path: FieldPath) -> ErrorList:
    """Check an image reference names both a repository and a tag."""
    errors: ErrorList = []
    if not image.repository:
        errors.append(required(path.child("repository"), ""))
    if not image.tag:
        errors.append(required(path.child("tag"), ""))
    return errors


def validate_cluster_config(
    config: ClusterConfig,
    path: FieldPath,
    image_check: Check = validate_image_spec,
) -> ErrorList:
    """Check the cluster-wide configuration shared by all node pools."""
    errors: ErrorList = []
    if config.pilot_image is not None:
        errors.extend(image_check(config.pilot_image, path.child("pilotImage")))
    return errors


@dataclass(frozen=True)
class ExternalValidators:
    """Checks the cluster validator delegates to.

    When ``cluster_config`` is not overridden, the pilot image is checked
    with whichever ``image`` check is configured.
    """

    name_format: Check = validate_dns1123_subdomain
    object_meta: Check = validate_object_meta
    persistence: Check = validate_persistence_config
    image: Check = validate_image_spec
    cluster_config: Check | None = None

    def validate_cluster_config(self, config: ClusterConfig, path: FieldPath) -> ErrorList:
        if self.cluster_config is not None:
            return self.cluster_config(config, path)
        return validate_cluster_config(config, path, image_check=self.image)


DEFAULT_VALIDATORS = ExternalValidators()
