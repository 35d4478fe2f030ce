from mandelreel.cli import main

raise SystemExit(main())
