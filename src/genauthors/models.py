from __future__ import annotations

import dataclasses


@dataclasses.dataclass
class Contribution:
    name: str = ""
    email: str = ""
    commits: int = 0
    login: str = ""  # GitHub login, resolved in markdown mode only
