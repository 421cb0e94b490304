"""Top-level addonkit commands; each module exposes SUMMARY, register_args and main."""
