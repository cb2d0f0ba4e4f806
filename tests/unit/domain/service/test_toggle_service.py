"""Unit tests for ToggleService."""

import pytest

from totem.config import DecaySettings
from totem.domain.error import AlreadyInactiveError, LabelNotFoundError, NotFoundError
from totem.domain.repository import ContentItemRepository
from totem.domain.service import ToggleService
from totem.domain.value import AnswerId, ContentItemId, UserId
from tests.conftest import DAY_MS, T0, make_content_item
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()

ITEM_ID = ContentItemId("item-1")
ALICE = UserId("alice")
BOB = UserId("bob")


async def _label(repo: ContentItemRepository, name: str = "Insightful", answer: int = 0):
    item = await repo.find_by_id(ITEM_ID)
    return item.answers[answer].find_label(name)


class TestLike:
    """Tests for liking a label."""

    @pytest.mark.asyncio
    async def test_like_records_endorsement_and_recomputes(self, unit_env):
        """A like adds a record and refreshes crispness and aggregate."""
        # Arrange
        toggle_service = await unit_env.get(ToggleService)
        repo = await unit_env.get(ContentItemRepository)
        await repo.save(make_content_item())

        # Act
        updated = await toggle_service.like(ITEM_ID, "Insightful", ALICE, now=T0)

        # Assert
        label = updated.answers[0].find_label("Insightful")
        assert label.crispness == 100.0
        assert label.aggregate.count == 1
        assert label.aggregate.active_user_ids == [ALICE]
        assert label.ledger.is_active_for(ALICE)
        assert updated.updated_at == T0

        stored = await _label(repo)
        assert stored == label

    @pytest.mark.asyncio
    async def test_like_twice_keeps_single_record(self, unit_env):
        """Liking an already liked label changes nothing in the ledger."""
        # Arrange
        toggle_service = await unit_env.get(ToggleService)
        repo = await unit_env.get(ContentItemRepository)
        await repo.save(make_content_item())
        first = await toggle_service.like(ITEM_ID, "Insightful", ALICE, now=T0)

        # Act
        second = await toggle_service.like(ITEM_ID, "Insightful", ALICE, now=T0 + DAY_MS)

        # Assert
        first_label = first.answers[0].find_label("Insightful")
        second_label = second.answers[0].find_label("Insightful")
        assert second_label.ledger == first_label.ledger
        assert second_label.aggregate.count == 1

    @pytest.mark.asyncio
    async def test_like_targets_first_answer_with_label(self, unit_env):
        """Without an answer ID the first answer carrying the label is used."""
        # Arrange
        toggle_service = await unit_env.get(ToggleService)
        repo = await unit_env.get(ContentItemRepository)
        await repo.save(make_content_item(answer_count=2))

        # Act
        await toggle_service.like(ITEM_ID, "Insightful", ALICE, now=T0)

        # Assert
        assert (await _label(repo, answer=0)).aggregate.count == 1
        assert (await _label(repo, answer=1)).aggregate.count == 0

    @pytest.mark.asyncio
    async def test_like_with_answer_id_targets_that_answer(self, unit_env):
        """Labels with the same name on other answers have their own ledger."""
        # Arrange
        toggle_service = await unit_env.get(ToggleService)
        repo = await unit_env.get(ContentItemRepository)
        await repo.save(make_content_item(answer_count=2))

        # Act
        await toggle_service.like(
            ITEM_ID, "Insightful", ALICE, answer_id=AnswerId("a1"), now=T0
        )

        # Assert
        assert (await _label(repo, answer=0)).aggregate.count == 0
        assert (await _label(repo, answer=1)).aggregate.count == 1

    @pytest.mark.asyncio
    async def test_label_names_are_case_sensitive(self, unit_env):
        """Only an exact name matches a label."""
        # Arrange
        toggle_service = await unit_env.get(ToggleService)
        repo = await unit_env.get(ContentItemRepository)
        await repo.save(make_content_item())

        # Act & Assert
        with pytest.raises(LabelNotFoundError):
            await toggle_service.like(ITEM_ID, "insightful", ALICE, now=T0)

    @pytest.mark.asyncio
    async def test_like_missing_item_raises(self, unit_env):
        """Toggling on an unknown item fails with not found."""
        toggle_service = await unit_env.get(ToggleService)

        with pytest.raises(NotFoundError):
            await toggle_service.like(ContentItemId("nope"), "Insightful", ALICE, now=T0)


class TestUnlike:
    """Tests for unliking a label."""

    @pytest.mark.asyncio
    async def test_unlike_deactivates_only_that_user(self, unit_env):
        """A likes, B likes, A unlikes: count 1 and A's record inactive."""
        # Arrange
        toggle_service = await unit_env.get(ToggleService)
        repo = await unit_env.get(ContentItemRepository)
        await repo.save(make_content_item())
        await toggle_service.like(ITEM_ID, "Insightful", ALICE, now=T0)
        await toggle_service.like(ITEM_ID, "Insightful", BOB, now=T0 + 1)

        # Act
        updated = await toggle_service.unlike(ITEM_ID, "Insightful", ALICE, now=T0 + 2)

        # Assert
        label = updated.answers[0].find_label("Insightful")
        assert label.aggregate.count == 1
        assert label.aggregate.active_user_ids == [BOB]
        assert label.ledger.find_record(ALICE).is_active is False
        assert label.ledger.find_record(ALICE).original_timestamp == T0

    @pytest.mark.asyncio
    async def test_unlike_without_like_leaves_item_untouched(self, unit_env):
        """A rejected unlike writes nothing."""
        # Arrange
        toggle_service = await unit_env.get(ToggleService)
        repo = await unit_env.get(ContentItemRepository)
        await repo.save(make_content_item())
        before = await repo.find_by_id(ITEM_ID)

        # Act & Assert
        with pytest.raises(AlreadyInactiveError):
            await toggle_service.unlike(ITEM_ID, "Insightful", ALICE, now=T0)

        assert await repo.find_by_id(ITEM_ID) == before

    @pytest.mark.asyncio
    async def test_relike_resumes_original_age(self, unit_env):
        """Unlike then like does not buy back crispness."""
        # Arrange
        toggle_service = await unit_env.get(ToggleService)
        repo = await unit_env.get(ContentItemRepository)
        await repo.save(make_content_item())
        await toggle_service.like(ITEM_ID, "Insightful", ALICE, now=T0)
        await toggle_service.unlike(ITEM_ID, "Insightful", ALICE, now=T0 + DAY_MS)

        # Act
        updated = await toggle_service.like(
            ITEM_ID, "Insightful", ALICE, now=T0 + 8 * DAY_MS
        )

        # Assert
        label = updated.answers[0].find_label("Insightful")
        assert label.ledger.find_record(ALICE).original_timestamp == T0
        assert label.crispness == 0.0


class TestRelikePolicy:
    """Tests for the configurable re-like policy."""

    @pytest.mark.asyncio
    async def test_relike_resets_age_when_configured(self, unit_env):
        """With reset_age_on_relike a re-like starts fresh."""
        # Arrange
        repo = await unit_env.get(ContentItemRepository)
        toggle_service = ToggleService(
            content_item_repository=repo,
            decay_settings=DecaySettings(reset_age_on_relike=True),
        )
        await repo.save(make_content_item())
        await toggle_service.like(ITEM_ID, "Insightful", ALICE, now=T0)
        await toggle_service.unlike(ITEM_ID, "Insightful", ALICE, now=T0 + DAY_MS)

        # Act
        updated = await toggle_service.like(
            ITEM_ID, "Insightful", ALICE, now=T0 + 8 * DAY_MS
        )

        # Assert
        assert updated.answers[0].find_label("Insightful").crispness == 100.0
