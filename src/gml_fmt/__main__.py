from __future__ import annotations

import sys

from gml_fmt.cli.main import main

if __name__ == "__main__":
    sys.exit(main())
