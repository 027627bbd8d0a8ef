from detprime.cli import main

raise SystemExit(main())
