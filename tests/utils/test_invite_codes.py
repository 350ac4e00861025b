import re

import pytest

from app.exceptions import InviteCodeGenerationError
from app.utils.invite_codes import (
    INVITE_CODE_LENGTH,
    allocate_invite_code,
    generate_invite_code,
)


def test_generate_invite_code_shape():
    for _ in range(50):
        code = generate_invite_code()
        assert len(code) == INVITE_CODE_LENGTH
        assert re.fullmatch(r"[a-z0-9]+", code)


def test_generate_invite_code_custom_length():
    assert len(generate_invite_code(12)) == 12


@pytest.mark.asyncio
async def test_allocate_returns_first_free_code():
    taken = {"aaaaaaa", "bbbbbbb"}
    candidates = iter(["aaaaaaa", "bbbbbbb", "ccccccc"])

    async def is_taken(code: str) -> bool:
        return code in taken

    code = await allocate_invite_code(is_taken, generator=lambda: next(candidates))

    assert code == "ccccccc"


@pytest.mark.asyncio
async def test_allocate_gives_up_after_max_attempts():
    calls = []

    async def is_taken(code: str) -> bool:
        calls.append(code)
        return True

    with pytest.raises(InviteCodeGenerationError) as exc_info:
        await allocate_invite_code(is_taken, generator=lambda: "same123", max_attempts=3)

    assert len(calls) == 3
    assert exc_info.value.status_code == 500
    assert exc_info.value.message == "Failed to generate invite code"
    assert exc_info.value.details == {"attempts": 3}
