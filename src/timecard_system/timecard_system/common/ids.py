from __future__ import annotations

import secrets
import string
import uuid
from datetime import datetime

from ..core.constants import EMPLOYEE_ID_PREFIX, EMPLOYEE_ID_SUFFIX_LENGTH
from .datetime_utils import epoch_millis

_ALPHABET = string.ascii_lowercase + string.digits


def new_id() -> str:
    return str(uuid.uuid4())


def new_employee_id(now: datetime) -> str:
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(EMPLOYEE_ID_SUFFIX_LENGTH))
    return f"{EMPLOYEE_ID_PREFIX}-{epoch_millis(now)}-{suffix}"
