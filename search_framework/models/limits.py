# Value of a limit or timeout setting that means "unbounded"
NO_LIMIT = -1
