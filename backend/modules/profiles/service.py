"""
Profile service implementation.

Reads and edits the profile columns of an account. Completion is cached
on the account as `profile_done` once it is first observed.
"""

import logging
from datetime import date, datetime
from typing import Any, Callable

from dateutil.relativedelta import relativedelta
from pydantic import ValidationError as PydanticValidationError

from modules.accounts.exceptions import InvalidNameError
from modules.accounts.interfaces import IAccountRepository
from modules.accounts.models import Account, AccountPatch
from modules.accounts.policy import is_valid_name, normalize_name

from .models import UpdateProfileRequest, UserData
from .exceptions import InvalidBirthDateError, InvalidProfileError

logger = logging.getLogger(__name__)

BIRTH_DATE_FORMAT = "%Y-%m-%d"
MAX_AGE_YEARS = 100

SOCIAL_FIELDS = ("instagram", "snapchat", "tiktok", "twitter", "facebook")


class ProfileService:
    """Profile operations backed by the account repository."""

    def __init__(
        self,
        repository: IAccountRepository,
        today: Callable[[], date] = date.today,
    ):
        self._repository = repository
        self._today = today

    async def get_user_data(self, user_id: str) -> UserData:
        account = await self._repository.get_account_by_id(user_id)
        return UserData(
            first_name=account.first_name,
            last_name=account.last_name,
            email=account.email,
        )

    async def update_profile(self, user_id: str, request: UpdateProfileRequest) -> None:
        """
        Apply the fields present in the request.

        Names are validated and normalized like at registration. Other
        strings are stripped; an explicit null clears an optional field.

        Raises:
            InvalidProfileError: No fields, or a field exceeds its column limit
            InvalidNameError: A name is empty or too long
            InvalidBirthDateError: Birth date malformed, in the future or over 100 years ago
        """
        fields: dict[str, Any] = request.model_dump(exclude_unset=True)
        if not fields:
            raise InvalidProfileError("No profile fields to update")

        for name in ("first_name", "last_name"):
            if name in fields:
                value = (fields[name] or "").strip()
                if not is_valid_name(value):
                    raise InvalidNameError()
                fields[name] = normalize_name(value)

        if "birth_date" in fields and fields["birth_date"] is not None:
            fields["birth_date"] = self._parse_birth_date(fields["birth_date"])

        for name in ("bio", *SOCIAL_FIELDS):
            if fields.get(name) is not None:
                fields[name] = fields[name].strip() or None

        try:
            patch = AccountPatch(**fields)
        except PydanticValidationError as e:
            raise InvalidProfileError(
                "Profile fields do not meet requirements",
                details={"fields": [".".join(str(p) for p in err["loc"]) for err in e.errors()]},
            )

        await self._repository.update_account(user_id, patch)
        logger.info(f"Updated profile fields {sorted(fields)} for account {user_id}")

    async def is_profile_done(self, user_id: str) -> bool:
        """
        Whether the profile is complete.

        Completion needs both names, a birth date, a bio and at least one
        social handle. A true result is persisted and returned from then on
        without recomputing.
        """
        account = await self._repository.get_account_by_id(user_id)
        if account.profile_done:
            return True

        if not _is_complete(account):
            return False

        await self._repository.update_account(user_id, AccountPatch(profile_done=True))
        return True

    def _parse_birth_date(self, value: str) -> date:
        try:
            birth_date = datetime.strptime(value, BIRTH_DATE_FORMAT).date()
        except ValueError:
            raise InvalidBirthDateError("Birth date must be formatted as YYYY-MM-DD")

        today = self._today()
        if birth_date > today:
            raise InvalidBirthDateError("Birth date cannot be in the future")
        if birth_date < today - relativedelta(years=MAX_AGE_YEARS):
            raise InvalidBirthDateError(f"Birth date cannot be more than {MAX_AGE_YEARS} years ago")

        return birth_date


def _is_complete(account: Account) -> bool:
    return bool(
        account.first_name
        and account.last_name
        and account.birth_date
        and account.bio
        and any(getattr(account, name) for name in SOCIAL_FIELDS)
    )
