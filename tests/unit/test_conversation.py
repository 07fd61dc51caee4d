"""Unit tests for conversation turns and the append-only store."""

import asyncio

import pydantic
import pytest

from alfred.conversation import ConversationManager, ConversationStore, ConversationTurn, Role


class TestConversationTurn:
    def test_factories(self):
        assert ConversationTurn.user("hi").role == Role.USER
        assert ConversationTurn.assistant("hello").role == Role.ASSISTANT

    def test_tool_turn_fields(self):
        turn = ConversationTurn.tool(
            tool_name="getFredData", content="{}", tool_call_id="call_1"
        )

        assert turn.role == Role.TOOL
        assert turn.tool_arguments == {}

    def test_tool_turn_requires_name(self):
        with pytest.raises(pydantic.ValidationError):
            ConversationTurn(role=Role.TOOL, content="{}")

    def test_user_turn_cannot_carry_tool_fields(self):
        with pytest.raises(pydantic.ValidationError):
            ConversationTurn(role=Role.USER, content="hi", tool_name="getFredData")

    def test_turns_are_immutable(self):
        turn = ConversationTurn.user("hi")

        with pytest.raises(pydantic.ValidationError):
            turn.content = "changed"


class TestConversationStore:
    @pytest.mark.asyncio
    async def test_append_preserves_order(self):
        store = ConversationStore()

        await store.append(ConversationTurn.user("one"))
        await store.append(ConversationTurn.assistant("two"))

        assert [t.content for t in store.read_all()] == ["one", "two"]
        assert len(store) == 2

    @pytest.mark.asyncio
    async def test_read_all_is_a_snapshot(self):
        store = ConversationStore()
        await store.append(ConversationTurn.user("one"))

        snapshot = store.read_all()
        await store.append(ConversationTurn.user("two"))

        assert len(snapshot) == 1
        assert isinstance(snapshot, tuple)

    def test_no_mutation_api(self):
        store = ConversationStore()

        for name in ("delete", "remove", "clear", "insert", "pop"):
            assert not hasattr(store, name)

    @pytest.mark.asyncio
    async def test_exclusive_serializes_cycles(self):
        store = ConversationStore()
        order: list[str] = []

        async def cycle(name: str):
            async with store.exclusive():
                order.append(f"{name}-start")
                await asyncio.sleep(0.01)
                order.append(f"{name}-end")

        await asyncio.gather(cycle("a"), cycle("b"))

        assert order == ["a-start", "a-end", "b-start", "b-end"]


class TestConversationManager:
    def test_get_creates_and_reuses(self):
        manager = ConversationManager()

        store = manager.get("abc")

        assert manager.get("abc") is store
        assert "abc" in manager

    def test_generated_ids_are_unique(self):
        manager = ConversationManager()

        assert manager.get().conversation_id != manager.get().conversation_id
