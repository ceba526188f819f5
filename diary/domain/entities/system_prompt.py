"""Per-user system prompt for recommendation generation."""

from dataclasses import dataclass, field

DEFAULT_SYSTEM_PROMPT_LINE = (
    "You are a helpful AI assistant that provides thoughtful recommendations "
    "based on diary entries."
)


def system_prompt_id(user_id: str) -> str:
    """Document id of a user's system prompt (one per user)."""
    return f"{user_id}-systemprompt"


@dataclass
class SystemPromptEntity:
    """Ordered prompt lines; never empty (falls back to the default line)."""

    user_id: str
    lines: list[str] = field(default_factory=lambda: [DEFAULT_SYSTEM_PROMPT_LINE])

    @property
    def id(self) -> str:
        return system_prompt_id(self.user_id)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    def add_line(self, line: str) -> None:
        self.lines.append(line)

    def remove_line(self, line: str) -> None:
        """Remove the first matching line; keep at least the default line."""
        if line in self.lines:
            self.lines.remove(line)
        if not self.lines:
            self.lines.append(DEFAULT_SYSTEM_PROMPT_LINE)
