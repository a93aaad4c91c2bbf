from .relay import ChatRelay, build_messages, build_system_prompt, get_chat_relay

__all__ = ["ChatRelay", "build_messages", "build_system_prompt", "get_chat_relay"]
