"""Entry point for `python -m rustman`."""

from rustman.rustdoc_to_man import main

raise SystemExit(main())
