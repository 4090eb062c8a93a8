"""Services — the watcher, live reload, publish, convert and build machinery."""
