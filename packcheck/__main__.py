from packcheck.cli import main

raise SystemExit(main())
