from addonkit.cli._dispatcher import main

if __name__ == "__main__":
    raise SystemExit(main())
