from depgraph.modules.cli import main

raise SystemExit(main())
