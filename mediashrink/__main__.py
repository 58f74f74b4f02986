from mediashrink.cli import main


raise SystemExit(main())
