"""Constants for buildmeta."""

# Subprocess timeouts (seconds)
GIT_TIMEOUT = 30

# Property file names
BUILD_PROPERTIES = "build.properties"
PROJECT_PROPERTIES = "project.properties"
CONFIG_FILE = "buildmeta.toml"

# Written when a checkout exists but HEAD cannot be resolved
NULL_COMMIT_HASH = "0" * 40
