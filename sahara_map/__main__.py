from sahara_map.cli import main

raise SystemExit(main())
