from __future__ import annotations

import re

SHELL_FENCE_TAGS = ("bash", "sh", "shell", "powershell", "cmd")

# The tag must end the info word: ```shell-session and ```sh`x stay untouched,
# which also keeps the rewrite idempotent.
_SHELL_FENCE = re.compile(
    r"```(?:" + "|".join(SHELL_FENCE_TAGS) + r")(?![\w`-])",
    flags=re.IGNORECASE,
)


def sanitize(text: str) -> str:
    """
    Strip shell language tags from fenced code block openers (```bash -> ```).

    This only makes it less likely that a naive consumer auto-runs a snippet.
    The code inside the block is left as is, so it is not a security boundary.
    """
    return _SHELL_FENCE.sub("```", text)
