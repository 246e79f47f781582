from plotxy.cli import main

raise SystemExit(main())
