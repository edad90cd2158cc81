import pytest

from freet_social.errors import NotFoundError
from freet_social.services.followers_service import FollowersService


@pytest.fixture
def service(collections):
    return FollowersService()


@pytest.mark.asyncio
async def test_follow_updates_both_views(service):
    await service.create_follower_view("alice")
    await service.create_follower_view("bob")

    followed = await service.add_follower("alice", "bob")
    follower = await service.find_one_by_username("bob")

    assert followed.followers == ["bob"]
    assert follower.following == ["alice"]


@pytest.mark.asyncio
async def test_follow_is_idempotent(service, collections):
    await service.create_follower_view("alice")
    await service.create_follower_view("bob")

    await service.add_follower("alice", "bob")
    await service.add_follower("alice", "bob")

    alice = await service.find_one_by_username("alice")
    bob = await service.find_one_by_username("bob")
    assert alice.followers == ["bob"]
    assert bob.following == ["alice"]


@pytest.mark.asyncio
async def test_follow_uses_stored_usernames(service):
    await service.create_follower_view("Alice")
    await service.create_follower_view("Bob")

    await service.add_follower("ALICE", "bob")

    alice = await service.find_one_by_username("alice")
    bob = await service.find_one_by_username("BOB")
    assert alice.followers == ["Bob"]
    assert bob.following == ["Alice"]


@pytest.mark.asyncio
async def test_unfollow_removes_both_entries(service):
    await service.create_follower_view("alice")
    await service.create_follower_view("bob")
    await service.add_follower("alice", "bob")

    followed = await service.remove_follower("alice", "bob")
    bob = await service.find_one_by_username("bob")

    assert followed.followers == []
    assert bob.following == []


@pytest.mark.asyncio
async def test_unfollow_without_follow_changes_nothing(service):
    await service.create_follower_view("alice")
    await service.create_follower_view("bob")

    followed = await service.remove_follower("alice", "bob")

    assert followed.followers == []
    assert followed.following == []


@pytest.mark.asyncio
async def test_self_follow_keeps_both_lists(service):
    await service.create_follower_view("alice")

    view = await service.add_follower("alice", "alice")
    stored = await service.find_one_by_username("alice")

    assert view.followers == ["alice"]
    assert view.following == ["alice"]
    assert stored.followers == ["alice"]
    assert stored.following == ["alice"]


@pytest.mark.asyncio
async def test_follow_requires_both_views(service):
    await service.create_follower_view("alice")

    with pytest.raises(NotFoundError) as exc_info:
        await service.add_follower("alice", "ghost")

    assert exc_info.value.status_code == 404
    alice = await service.find_one_by_username("alice")
    assert alice.followers == []
