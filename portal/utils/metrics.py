from prometheus_client import Counter

OTP_SENT = Counter(
    "portal_otp_sent_total",
    "One-time codes issued, labelled by delivery outcome",
    ["outcome"],
)
LOGINS = Counter(
    "portal_logins_total",
    "Successful and failed logins, labelled by method",
    ["method", "outcome"],
)
REGISTRATIONS = Counter(
    "portal_registrations_total",
    "Professional registrations accepted",
)
