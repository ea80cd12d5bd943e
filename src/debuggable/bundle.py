"""Identity of the hosting application, shown as the bundle tag in log lines."""

import os
import sys
from pathlib import Path
from typing import Optional

BUNDLE_ENV_VAR = "DEBUGGABLE_BUNDLE_ID"


def bundle_identifier() -> Optional[str]:
    """Return an identifier for the running application.

    Resolution order:
      1. $DEBUGGABLE_BUNDLE_ID
      2. the package of the __main__ module (``python -m pkg.tool``)
      3. the stem of the __main__ script file

    Returns None for interactive sessions with no script.
    """
    env = os.environ.get(BUNDLE_ENV_VAR)
    if env:
        return env

    main = sys.modules.get("__main__")
    if main is None:
        return None
    spec = getattr(main, "__spec__", None)
    if spec is not None and spec.name:
        name = spec.name
        if name.endswith(".__main__"):
            name = name[: -len(".__main__")]
        return name
    path = getattr(main, "__file__", None)
    if path:
        return Path(path).stem
    return None
