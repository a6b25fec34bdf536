from typing import Final

VERSION: Final[str] = "1.0.0"
