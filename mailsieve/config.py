"""Compile-time configuration: defaults, limits, option letters and recipe flags."""

from __future__ import annotations

import enum
import stat

# --- version -----------------------------------------------------------------

VERSION_NUMBER = "3.24"
VERSION_DATE = "2022/03/02"
PROGRAM_NAME = "mailsieve"
FORMAT_PROGRAM_NAME = "mailform"


def version_banner() -> str:
    """Return the version line, with its leading space and trailing newline."""
    return f" v{VERSION_NUMBER} {VERSION_DATE}\n"


# --- environment handling ----------------------------------------------------

KEEPENV = ("TZ",)
PRESTENV = ("IFS", "ENV", "PWD")
LDENV = ("LD_", "_RLD", "LIBPATH=", "ELF_LD_", "AOUT_LD_")
TRUSTED_IDS = (
    "root", "daemon", "uucp", "mail", "x400", "network",
    "list", "slist", "lists", "news",
)

DEFMAILDIR = "$HOME"
RCFILE = "$HOME/.procmailrc"
ETCRC = "/etc/procmailrc"
ETCRCS = "/etc/procmailrcs/"
CONFRC = "/etc/procmail.conf"

DEFAULT_DOTLOCK = True
SANE_VARMAIL = False
ROOT_UID = 0
DEFAULT_VERBOSE = 0
NO_CHECK_STGID = True
CAN_TOGGLE_SGID = False

# --- permissions -------------------------------------------------------------

UPDATE_MASK = stat.S_IXOTH
OVERRIDE_MASK = stat.S_IXUSR | stat.S_ISUID | stat.S_ISGID | stat.S_ISVTX
INIT_UMASK = stat.S_IRWXG | stat.S_IRWXO
GROUPW_UMASK = INIT_UMASK & ~stat.S_IRWXG
NORMPERM = (
    stat.S_IRUSR | stat.S_IWUSR | stat.S_IRGRP | stat.S_IWGRP
    | stat.S_IROTH | stat.S_IWOTH | UPDATE_MASK
)
READPERM = stat.S_IRUSR | stat.S_IRGRP | stat.S_IROTH
NORMDIRPERM = stat.S_IRWXU | stat.S_IRWXG | stat.S_IRWXO
LOCKPERM = READPERM

# --- sizes and limits --------------------------------------------------------

MAX_LOCKSIZE = 16
DEFLINEBUF = 2048
BLKSIZ = 16384
STDBUF = 1024
MINLOGBUF = 81
MAXLOGBUF = 1000
MINLINEBUF = 128
XTRALINEBUF = 2
RETRY_UNIQUE = 8
NFS_TRY = 7 + 1
NICE_RANGE = 39
MAILDIR_RETRIES = 5
MAXSUBJECTSHOW = 78
LENTSTOP = 9
TABWIDTH = 8

MAX32 = 2147483647
MIN32 = -MAX32

# --- numeric variable defaults -----------------------------------------------

DEFLOCKSLEEP = 8
DEFLOCKTIMEOUT = 1024
DEFSUSPEND = 16
DEFNORESRETRY = 4
DEFTIMEOUT = DEFLOCKTIMEOUT - 64
DEFLOGABSTRACT = -1

NUMERIC_DEFAULTS = {
    "LOCKSLEEP": DEFLOCKSLEEP,
    "LOCKTIMEOUT": DEFLOCKTIMEOUT,
    "SUSPEND": DEFSUSPEND,
    "NORESRETRY": DEFNORESRETRY,
    "TIMEOUT": DEFTIMEOUT,
    "VERBOSE": DEFAULT_VERBOSE,
    "LOGABSTRACT": DEFLOGABSTRACT,
}

# --- string variable defaults ------------------------------------------------

DEFSHELLMETAS = "&|<>~;?*["
DEFLOCKEXT = ".lock"
DEFMSGPREFIX = "msg."
DEFSHELLFLAGS = "-c"
DEFSENDMAIL = "/usr/sbin/sendmail"
DEFFLAGSENDMAIL = "-oi"
DEFDEFAULT = "$ORGMAIL"

STRING_DEFAULTS = {
    "SHELLMETAS": DEFSHELLMETAS,
    "LOCKEXT": DEFLOCKEXT,
    "MSGPREFIX": DEFMSGPREFIX,
    "TRAP": "",
    "SHELLFLAGS": DEFSHELLFLAGS,
    "SENDMAIL": DEFSENDMAIL,
    "SENDMAILFLAGS": DEFFLAGSENDMAIL,
}

MATCHVAR = "MATCH"
AMATCHVAR = "MATCH="
OFFVALUE = "no"

# --- miscellaneous strings ---------------------------------------------------

MAILERDAEMON = "MAILER-DAEMON"
FAKE_FIELD = ">From "
BOGUS_PREFIX = "BOGUS."
COMSAT_HOST = "localhost"
COMSAT_SERVICE = "biff"
COMSAT_PROTOCOL = "udp"
COMSAT_EXTRA_SEP = ":"
SERV_ADDR_SEP = "@"
BIN_SH = "/bin/sh"
ROOT_DIR = "/"
DEAD_LETTER = "/tmp/dead.letter"
DEV_NULL = "/dev/null"
CURDIR = "."
PARDIR = ".."
DIRSEP = "/"
MAILDIR_TMP = "/tmp"
MAILDIR_CUR = "/cur"
MAILDIR_NEW = "/new"
EOF_NAME = " \t\n#`'\");"
FROM_EXPR = "\nFrom "
FROM = "From "
SHFROM = "From"
NSUBJECT = "^Subject:.*$"
FOLDER = "  Folder: "
TABCHAR = "\t"
UNIQ_PREFIX = "_"
ESCAP = ">"

# --- regular expression macros -----------------------------------------------

TO_KEY = "^TO_"
TO_SUBSTITUTE = (
    "(^((Original-)?(Resent-)?(To|Cc|Bcc)|"
    "(X-Envelope|Apparently(-Resent)?)-To):(.*[^-a-zA-Z0-9_.])?)"
)
TOKEY = "^TO"
TOSUBSTITUTE = (
    "(^((Original-)?(Resent-)?(To|Cc|Bcc)|"
    "(X-Envelope|Apparently(-Resent)?)-To):(.*[^a-zA-Z])?)"
)
FROMD_KEY = "^FROM_DAEMON"
FROMD_SUBSTITUTE = (
    "(^(Mailing-List:|Precedence:.*(junk|bulk|list)|"
    "To: Multiple recipients of |"
    "(((Resent-)?(From|Sender)|X-Envelope-From):|>?From )([^>]*[^(.%@a-z0-9])?("
    "Post(ma?(st(e?r)?|n)|office)|(send)?Mail(er)?|daemon|m(mdf|ajordomo)|n?uucp|"
    "LIST(SERV|proc)|NETSERV|o(wner|ps)|r(e(quest|sponse)|oot)|b(ounce|bs\\.smtp)|"
    "echo|mirror|s(erv(ices?|er)|mtp(error)?|ystem)|"
    "A(dmin(istrator)?|MMGR|utoanswer)"
    ")(([^).!:a-z0-9][-_a-z0-9]*)?[%@>\t ][^<)]*(\\(.*\\).*)?)?$([^>]|$)))"
)
FROMM_KEY = "^FROM_MAILER"
FROMM_SUBSTITUTE = (
    "(^(((Resent-)?(From|Sender)|X-Envelope-From):|"
    ">?From )([^>]*[^(.%@a-z0-9])?("
    "Post(ma(st(er)?|n)|office)|(send)?Mail(er)?|daemon|mmdf|n?uucp|ops|"
    "r(esponse|oot)|(bbs\\.)?smtp(error)?|s(erv(ices?|er)|ystem)|A(dmin(istrator)?|"
    "MMGR)"
    ")(([^).!:a-z0-9][-_a-z0-9]*)?[%@>\t ][^<)]*(\\(.*\\).*)?)?$([^>]|$))"
)

# Longer keys come first so that "^TO_" is tried before "^TO".
REGEX_MACROS = {
    TO_KEY: TO_SUBSTITUTE,
    TOKEY: TOSUBSTITUTE,
    FROMD_KEY: FROMD_SUBSTITUTE,
    FROMM_KEY: FROMM_SUBSTITUTE,
}

# --- command line options ----------------------------------------------------

HELPOPT1 = "h"
HELPOPT2 = "?"
VERSIONOPT = "v"
PRESERVOPT = "p"
TEMPFAILOPT = "t"
MAILFILTOPT = "m"
FROMWHOPT = "f"
REFRESH_TIME = "-"
ALTFROMWHOPT = "r"
OVERRIDEOPT = "o"
BERKELEYOPT = "Y"
ALTBERKELEYOPT = "y"
ARGUMENTOPT = "a"
DELIVEROPT = "d"
LMTPOPT = "z"

USAGE = (
    f"Usage: {PROGRAM_NAME} [-vptoY] [-f fromwhom] [parameter=value | rcfile] ...\n"
    f"   Or: {PROGRAM_NAME} [-toY] [-f fromwhom] [-a argument] ... -d recipient ...\n"
    f"   Or: {PROGRAM_NAME} [-ptY] [-f fromwhom] -m [parameter=value] ... rcfile [arg] ...\n"
    f"   Or: {PROGRAM_NAME} [-toY] [-a argument] ... -z [delim]\n"
)
HELP = (
    "\t-v\t\tdisplay the version number and exit\n"
    "\t-p\t\tpreserve (most of) the environment upon startup\n"
    "\t-t\t\tfail softly if mail is undeliverable\n"
    "\t-f fromwhom\t(re)generate the leading 'From ' line\n"
    "\t-o\t\toverride the leading 'From ' line if necessary\n"
    "\t-Y\t\tBerkeley format mailbox, disregard Content-Length:\n"
    "\t-a argument\twill set $1, $2, etc\n"
    "\t-d recipient\texplicit delivery mode\n"
    "\t-z\t\tact as an LMTP server\n"
    "\t-m\t\tact as a general purpose mail filter\n"
)
QUICK_REFERENCE = (
    "Recipe flag quick reference:\n"
    "\tH  egrep header (default)\tB  egrep body\n"
    "\tD  distinguish case\n"
    "\tA  also execute this recipe if the common condition matched\n"
    "\ta  same as 'A', but only if the previous recipe was successful\n"
    "\tE  else execute this recipe, if the preceding condition didn't match\n"
    "\te  on error execute this recipe, if the previous recipe failed\n"
    "\th  deliver header (default)\tb  deliver body (default)\n"
    "\tf  filter\t\t\ti  ignore write errors\n"
    "\tc  carbon copy or clone message\n"
    "\tw  wait for a program\t\tr  raw mode, mail as is\n"
    "\tW  same as 'w', but suppress 'Program failure' messages\n"
)

# --- formatter options -------------------------------------------------------

UNKNOWN = "foo@bar"
OLD_PREFIX = "Old-"
RESENT_ = "Resent-"
BABYL_SEP1 = "\037"
BABYL_SEP2 = "\f"
DEFFILENO = "FILENO=000"
DEFMINFIELDS = 2

# --- recipe flags ------------------------------------------------------------

RECFLAGS = "HBDAahbfcwWiEer"


class RecipeFlag(enum.IntFlag):
    """Recipe flags; each bit position is the flag letter's index in RECFLAGS."""

    HEAD_GREP = 1 << 0
    BODY_GREP = 1 << 1
    DISTINGUISH_CASE = 1 << 2
    ALSO_NEXT_RECIPE = 1 << 3
    ALSO_N_IF_SUCC = 1 << 4
    PASS_HEAD = 1 << 5
    PASS_BODY = 1 << 6
    FILTER = 1 << 7
    CONTINUE = 1 << 8
    WAIT_EXIT = 1 << 9
    WAIT_EXIT_QUIET = 1 << 10
    IGNORE_WRITERR = 1 << 11
    ELSE_DO = 1 << 12
    ERROR_DO = 1 << 13
    RAW_NONL = 1 << 14

    @property
    def letters(self) -> str:
        """The flag letters set in this value, in canonical order."""
        return "".join(
            letter for index, letter in enumerate(RECFLAGS)
            if self & (1 << index)
        )


_BY_LETTER = {letter: RecipeFlag(1 << index) for index, letter in enumerate(RECFLAGS)}


def parse_recipe_flags(flags: str) -> RecipeFlag:
    """Parse recipe flag letters, applying the H and hb defaults.

    Whitespace is ignored; an unknown letter raises ValueError.
    """
    result = RecipeFlag(0)
    for ch in flags:
        if ch.isspace():
            continue
        try:
            result |= _BY_LETTER[ch]
        except KeyError:
            raise ValueError(f"unrecognised recipe flag {ch!r}") from None
    if not result & (RecipeFlag.HEAD_GREP | RecipeFlag.BODY_GREP):
        result |= RecipeFlag.HEAD_GREP
    if not result & (RecipeFlag.PASS_HEAD | RecipeFlag.PASS_BODY):
        result |= RecipeFlag.PASS_HEAD | RecipeFlag.PASS_BODY
    return result