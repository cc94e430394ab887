"""Header field names that mark the start of a message when splitting mailboxes."""

from __future__ import annotations

__all__ = ["KNOWN_FIELDS", "known_field_name", "is_known_field"]

KNOWN_FIELDS: tuple[str, ...] = (
    # RFC 822
    "Return-Path:", "Received:", "Reply-To:", "From:", "Sender:",
    "Resent-Reply-To:", "Resent-From:", "Resent-Sender:", "Date:",
    "Resent-Date:", "To:", "Resent-To:", "Cc:", "Resent-Cc:", "Bcc:",
    "Resent-Bcc:", "Message-ID:", "Resent-Message-ID:", "In-Reply-To:",
    "References:", "Keywords:", "Subject:", "Comments:", "Encrypted:",
    # DSN
    "Notice-Requested-Upon-Delivery-To:", "Final-Recipient:", "Remote-MTA:",
    "Diagnostic-Code:", "Last-Attempt-Date:",
    # sendmail
    "Errors-To:", "Return-Receipt-To:", "Precedence:", "Full-Name:",
    "Posted-Date:", "Received-Date:", "Message:", "Text:", "Via:",
    "Apparently-To:", "Apparently-Resent-To:",
    # qmail
    "Delivered-To:", "Mailing-List:",
    # X.400
    "Autoforwarded:", "Content-Identifier:", "Conversion:",
    "Conversion-With-Loss:", "Delivery-Date:",
    "Discarded-X400-IPMS-Extensions:", "Discarded-X400-MTS-Extensions:",
    "DL-Expansion-History:", "Deferred-Delivery:", "Expiry-Date:",
    "Importance:", "Incomplete-Copy:", "Language:", "Latest-Delivery-Time:",
    "Message-Type:", "Obsoletes:", "Supersedes:",
    "Original-Encoded-Information-Types:", "Originator-Return-Address:",
    "Priority:", "Reply-By:", "Requested-Delivery-Method:", "Sensitivity:",
    "X400-Content-Type:", "X400-MTS-Identifier:", "X400-Originator:",
    "X400-Received:", "X400-Recipients:", "X400-Trace:",
    "Alternate-Recipient:", "Prevent-Nondelivery-Report:",
    "Generate-Delivery-Report:", "Disclose-Recipients:", "Content-Return:",
    "Auto-Submitted:", "PP-Warning:",
    # Mush, MH
    "Fcc:", "Resent:", "Forwarded:", "Replied:",
    # USENET
    "Article:", "Path:", "Summary:", "Organisation:", "Organization:",
    "Newsgroups:", "Followup-To:", "Approved:", "Lines:", "Expires:",
    "Control:", "Distribution:", "Xref:", "Originator:", "NNTP-Posting-Host:",
    "Submitted-by:", "Posted-To:", "Mail-Copies-To:", "Title:",
    "Article-I.D.:", "Posted:", "Relay-Version:",
    # UUCP, Internet, MIME
    "Sent-By:", "Content-Type:", "Encoding:", "Content-MD5:", "MIME-Version:",
    "Content-Transfer-Encoding:", "Content-ID:", "Content-Description:",
    "Content-Disposition:",
    # HTTP
    "Accept:", "Public:", "Allow:", "Last-Modified:", "URI:", "Version:",
    "Derived-From:", "Content-Language:", "Cost:", "Server:", "WWW-Link:",
    # MMDF, SysV mailer
    "Acknowledge-To:", "Transport-Options:", "Default-Options:",
    "Content-Length:", "Reference:", "Auto-Forwarded-From:",
    "Auto-Forward-Count:", "End-of-Header:", "Original-From:",
    "Original-To:", "Original-Cc:", "Original-Auto-Forwarded-From:",
    "Original-Date:", "Not-Delivered-To:", "Report-Version:",
    "Original-Received:",
    # assorted mailers
    "Status:", "Mail-from:", "Return-Receipt-Requested:", "MR-Received:",
    "App-Message-ID:", "Hop-count:", "From-warning:",
    # remailers
    "Request-Remailing-To:", "Anon-Send-To:", "Latent-Time:", "Cutmarks:",
    "Post-To:", "Anon-Post-To:", "Encrypt-Key:",
    # miscellaneous
    "Read-Receipt-To:", "Fake-Sender:", "Envelope-To:", "User-Agent:",
    "NNTP-Posting-Date:",
)

_BY_LOWER = {name.lower(): name for name in KNOWN_FIELDS}


def known_field_name(line: str) -> str | None:
    """Return the canonical name of the known field ``line`` starts with.

    Field names are compared without regard to case; None is returned when
    the line does not start with a known field.
    """
    colon = line.find(":")
    if colon < 0:
        return None
    return _BY_LOWER.get(line[: colon + 1].lower())


def is_known_field(line: str) -> bool:
    """Tell whether ``line`` starts with a known header field."""
    return known_field_name(line) is not None