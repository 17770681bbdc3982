import pytest
from pydantic import ValidationError

from lm_log_service.errors import InvalidRole
from lm_log_service.schemas.prompt import ChatRole, PromptMessage, decode_role


class TestDecodeRole:
    @pytest.mark.parametrize("tag", ["system", "assistant", "user", "tool"])
    def test_known_tags(self, tag):
        role = decode_role(tag)
        assert role.value == tag

    def test_enum_passes_through(self):
        assert decode_role(ChatRole.tool) is ChatRole.tool

    @pytest.mark.parametrize("tag", ["bogus", "User", "", "function"])
    def test_unknown_tags_rejected(self, tag):
        with pytest.raises(InvalidRole) as exc_info:
            decode_role(tag)
        assert exc_info.value.value == tag

    def test_non_string_rejected(self):
        with pytest.raises(InvalidRole):
            decode_role(1)


class TestPromptMessage:
    def test_decodes_from_wire(self):
        msg = PromptMessage.model_validate({"role": "user", "content": "hi"})
        assert msg.role is ChatRole.user
        assert msg.content == "hi"

    def test_bogus_role_rejected(self):
        with pytest.raises(ValidationError, match="Invalid chat role 'bogus'"):
            PromptMessage.model_validate({"role": "bogus", "content": "hi"})

    def test_encodes_symmetrically(self):
        wire = {"role": "assistant", "content": "sure"}
        assert PromptMessage.model_validate(wire).model_dump(mode="json") == wire

    def test_structural_equality(self):
        a = PromptMessage(role=ChatRole.user, content="hi")
        b = PromptMessage.model_validate({"role": "user", "content": "hi"})
        assert a == b
        assert a != PromptMessage(role=ChatRole.assistant, content="hi")

    def test_immutable(self):
        msg = PromptMessage(role=ChatRole.user, content="hi")
        with pytest.raises(ValidationError):
            msg.content = "changed"
