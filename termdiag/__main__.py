"""Allow ``python -m termdiag``."""

from termdiag.main import main

raise SystemExit(main())
