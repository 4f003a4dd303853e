"""Tools an agent can run: files, git, search, shell and web requests."""