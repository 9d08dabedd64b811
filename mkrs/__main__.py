from mkrs.cli import main

raise SystemExit(main())
