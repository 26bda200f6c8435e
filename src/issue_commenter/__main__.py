from issue_commenter.main import main

raise SystemExit(main())
