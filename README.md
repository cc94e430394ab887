# mailsieve

Building blocks for a mail delivery filter. The package has no
dependencies outside the standard library and runs on POSIX systems.

## Modules

- `mailsieve.regexp`: an egrep-style matcher with mail-filter rules.
  In these rules, `^` and `$` stand for a newline. `^^` anchors at the
  very start of the text, or at its very end when it closes a pattern.
  `\<` and `\>` match a non-word character. `\/` marks where the
  extracted part of a match begins. Use `compile_regex(pattern,
  ignore_case)` to get a `CompiledRegex`. Its
  `search(text, offset=0)` returns a `MatchResult` or `None`. A
  `MatchResult` holds `end`, one past the end of the match, and `match`,
  the text after `\/`, or `None` when the pattern has no `\/`. A
  malformed pattern raises `RegexError`.
- `mailsieve.variables`: rcfile variable handling. It contains:
  - `VariableStore`, which holds an environment and acts on the special
    variables `LINEBUF`, `MAILDIR`, `LOGFILE`, `LOG`, `EXITCODE`,
    `SHIFT`, `UMASK`, `HOST` and the numeric and string settings such as
    `VERBOSE`, `TIMEOUT` or `SHELLMETAS`. It provides `putenv`,
    `getenv`, `set_value`, `apply`, `append_to_last` and
    `set_exit_code`.
  - `parse_env_int`, which reads numbers and yes/no/on/off/all style
    words.
  - `alphanum`.
  - `cleanup_environment`, which scrubs a list of `NAME=value` entries.
    It keeps only `TZ` unless asked to preserve the environment. It
    drops malformed entries, duplicates and dynamic-loader variables.
- `mailsieve.pipes`: `PipeRunner` starts programs with a timeout. A
  command that contains shell metacharacters runs through the shell.
  Other commands are split into words. The methods are:
  - `pipe_in` feeds a message to a program.
  - `pipe_through` filters a message.
  - `from_program` captures at most `limit` bytes of output and reports
    whether the output overflowed.
  - `exec_trap` runs a trap command with its output sent to stderr.

  When `wait` is set, a failing program raises `ProgramFailure`. A
  timeout raises `TimeoutError`.
- `mailsieve.robust`: `resilient_call` retries calls that fail for lack
  of file slots, processes or memory. This module also has
  `open_append`, `open_log` and `set_umask`.
- `mailsieve.textutil`: `strtol`, `strpbrk`, `strlcpy` and `strlcat`,
  which follow their C library counterparts.
- `mailsieve.fields`: `KNOWN_FIELDS`, a list of well-known header field
  names. `known_field_name(line)` and `is_known_field(line)` compare
  field names without regard to case.
- `mailsieve.config`: compiled-in defaults and limits, plus the
  `RecipeFlag` flag set. `parse_recipe_flags(flags)` applies the
  default `H` and `hb` flags and rejects unknown letters.
  `version_banner()` returns the version line.

## Example

```python
from mailsieve.regexp import compile_regex

rx = compile_regex(r"^Subject:.*\/urgent.*", ignore_case=True)
result = rx.search("From: a@example.com\nSubject: Re: URGENT call\n")
if result:
    print(result.match)
```

## Installation helpers

Two commands help with setting up an installation.

```
mailsieve-recommend BINARY LOCKFILE_BINARY
```

This command prints suggested `chown`, `chgrp` and `chmod` commands for
the two binaries. It bases them on the group of any setgid mailer among
`/bin/mail`, `/bin/lmail`, `/usr/lib/sendmail` and `/usr/lib/smail`,
and on the permissions of `/var/mail`.

```
mailsieve-setid USER [DIRECTORY]
```

Run this command as root. It switches to the given user and starts
`$SHELL`. It does so only if `install.sh` in the current directory is
readable as that user. If you name a directory, the command first checks
that the directory belongs to that user and group.

## What this package does not do

The package provides the pieces listed above and no complete delivery
program. It does not:

- read or execute rcfiles
- lock or write mailboxes
- split or reformat mailboxes
- notify a comsat daemon
- provide a command that delivers mail

## Tests

```
pip install -e .[test]
pytest
```