"""Starter .credscan.toml template."""

DEFAULT_TOML = """\
# credscan configuration
# Command-line flags override the values below.
version = "1.0"

[discovery]
include = ".*"            # filename regex
exclude = ""              # filename / directory-name regex to skip
# default_exclude = "^(\\\\.git|.*\\\\.zip|.*\\\\.gz|.*\\\\.tar|.*\\\\.exe)$"
path_exclude = ""         # full-path regex to skip
skip_binary = true
batch_size = 5

[patterns]
# extra = ['(?i)(client_secret)\\s*=\\s*([^\\s]+)']   # group 1 = label, group 2 = value

[check]
mode = "letter+digit+word"   # letter | digit | special | letter+digit | letter+word | letter+digit+word | all
words_file = "~/cred-detect-word.txt"
min_length = 4
entropy_threshold = 0.0

[profile]
# path = "cred-detect-profile.json"   # suppress findings already in this file
# save = "cred-detect-profile.json"   # write this run's findings here

[output]
format = "json"           # json | terminal
debug = false             # prints secret values unmasked; never enable in CI

[scan]
# workers = 4             # default: number of CPUs
"""
