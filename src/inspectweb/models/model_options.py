"""Models offered in the new session form."""

from typing import NamedTuple


class ModelOption(NamedTuple):
    id: str
    name: str
    description: str


DEFAULT_MODEL = "claude-haiku-4-5"

MODEL_OPTIONS: tuple[ModelOption, ...] = (
    ModelOption("claude-haiku-4-5", "Claude Haiku 4.5", "Fast & affordable"),
    ModelOption("claude-sonnet-4-5", "Claude Sonnet 4.5", "Balanced performance"),
    ModelOption("opencode/big-pickle", "Big Pickle", "Free on OpenCode"),
    ModelOption("opencode/glm-4.7-free", "GLM 4.7", "Free on OpenCode"),
    ModelOption("opencode/grok-code", "Grok Code", "Free on OpenCode"),
)


def is_known_model(model_id: str) -> bool:
    return any(option.id == model_id for option in MODEL_OPTIONS)
