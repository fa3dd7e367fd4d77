from flatjson.cli import main

raise SystemExit(main())
