"""Constants for lead scoring signal detection and configuration defaults."""

# Score bounds applied once at the orchestrator boundary
MIN_SCORE = 0
MAX_SCORE = 100

# Component categories, always present in a score breakdown
CATEGORY_JOB_ROLE = "jobRole"
CATEGORY_URGENCY = "urgency"
CATEGORY_ENGAGEMENT = "engagement"
CATEGORY_ENRICHMENT = "enrichment"
CATEGORY_NEGATIVE = "negative"

SCORE_CATEGORIES = (
    CATEGORY_JOB_ROLE,
    CATEGORY_URGENCY,
    CATEGORY_ENGAGEMENT,
    CATEGORY_ENRICHMENT,
    CATEGORY_NEGATIVE,
)

# Tags
TAG_INVALID_DATA = "invalid_data"
TAG_NO_CONFIG = "no_config"
TAG_SCORING_ERROR = "scoring_error"
TAG_ENRICHED = "enriched"
TAG_COMPETITOR = "competitor"
TAG_FREE_EMAIL = "free_email"
TAG_INVALID_DOMAIN = "invalid_domain"
TAG_SPAM = "spam"
TAG_EXECUTIVE = "executive"

# Trace lines for negative signals
TRACE_COMPETITOR = "Competitor penalty applied"
TRACE_FREE_EMAIL = "Free email penalty"
TRACE_INVALID_DOMAIN = "Invalid domain penalty"
TRACE_SPAM = "Spam penalty applied"

# Seniority vocabulary, highest tier first. Each tier maps to the share of
# the jobRole weight it earns; terms match on word boundaries.
JOB_ROLE_TIERS = (
    (
        "executive",
        1.0,
        (
            "ceo",
            "cto",
            "cfo",
            "coo",
            "cmo",
            "cio",
            "ciso",
            "cro",
            "chief",
            "founder",
            "co-founder",
            "cofounder",
            "president",
            "managing partner",
        ),
    ),
    ("vice_president", 0.85, ("vp", "svp", "evp", "vice president", "head of", "general manager")),
    ("director", 0.7, ("director", "principal")),
    ("manager", 0.4, ("manager", "lead", "supervisor")),
)

# Lead attribute paths consulted for the free-text job title
TITLE_PATHS = ("fields.title", "fields.job_title", "fields.jobTitle", "title")

# Categorical indicator values → share of the category weight
URGENCY_LEVELS = {
    "immediate": 1.0,
    "asap": 1.0,
    "urgent": 1.0,
    "high": 1.0,
    "this_month": 0.8,
    "soon": 0.6,
    "medium": 0.6,
    "this_quarter": 0.6,
    "low": 0.2,
    "this_year": 0.2,
    "later": 0.1,
    "exploring": 0.1,
}
URGENCY_PATHS = ("fields.urgency", "fields.timeline", "urgency")

ENGAGEMENT_LEVELS = {
    "demo_requested": 1.0,
    "very_interested": 1.0,
    "high": 1.0,
    "interested": 0.6,
    "medium": 0.6,
    "engaged": 0.6,
    "low": 0.2,
    "curious": 0.2,
    "browsing": 0.1,
}
ENGAGEMENT_PATHS = ("fields.engagement", "fields.interest", "engagement")

# Enrichment tier lookups, direct attributes first, then the nested block
COMPANY_SIZE_PATHS = (
    "fields.company_size",
    "fields.companySize",
    "fields.enrichment.companySize",
    "fields.enrichment.company_size",
)
INDUSTRY_PATHS = ("fields.industry", "fields.enrichment.industry")
ENRICHMENT_COMPETITOR_FLAG = "fields.enrichment.isCompetitor"
ENRICHMENT_FREE_MAILBOX_FLAG = "fields.enrichment.isFreeMailbox"

# Free mailbox providers
FREE_EMAIL_DOMAINS = frozenset(
    {
        "gmail.com",
        "googlemail.com",
        "yahoo.com",
        "yahoo.co.uk",
        "hotmail.com",
        "outlook.com",
        "aol.com",
        "icloud.com",
        "me.com",
        "mac.com",
        "live.com",
        "msn.com",
        "yandex.com",
        "yandex.ru",
        "mail.ru",
        "qq.com",
        "163.com",
        "126.com",
        "naver.com",
        "web.de",
        "gmx.de",
        "gmx.com",
        "t-online.de",
        "orange.fr",
        "free.fr",
        "libero.it",
        "btinternet.com",
        "protonmail.com",
        "proton.me",
        "tutanota.com",
        "mailfence.com",
        "hushmail.com",
        "zoho.com",
        "zohomail.com",
        "mail.com",
        "email.com",
        "fastmail.com",
        "hey.com",
        "rediffmail.com",
        "seznam.cz",
        "wp.pl",
        "onet.pl",
    }
)

# Throwaway mailboxes count as a spam indicator
DISPOSABLE_EMAIL_DOMAINS = frozenset(
    {
        "10minutemail.com",
        "guerrillamail.com",
        "mailinator.com",
        "tempmail.org",
        "temp-mail.org",
        "throwaway.email",
        "getnada.com",
        "maildrop.cc",
        "fakemailgenerator.com",
        "33mail.com",
        "spamgourmet.com",
        "sneakemail.com",
        "yopmail.com",
        "sharklasers.com",
        "grr.la",
        "dispostable.com",
        "tempail.com",
        "minuteinbox.com",
        "emailondeck.com",
        "mohmal.com",
        "mytrashmail.com",
    }
)

# Form-builder vendors competing for the same buyers
COMPETITOR_DOMAINS = frozenset(
    {
        "typeform.com",
        "typeform.io",
        "jotform.com",
        "jotform.io",
        "forms.google.com",
        "forms.office.com",
        "formstack.com",
        "wufoo.com",
        "cognitoforms.com",
        "surveymonkey.com",
        "tally.so",
    }
)

# Local-part patterns that flag a submission as spam
SPAM_LOCAL_PART_PATTERNS = (r"^test", r"^temp", r"^fake", r"^spam", r"^asdf", r"\d{8,}")

# Structural check for a registrable domain name
DOMAIN_PATTERN = r"^(?=.{4,253}$)([a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?\.)+[a-z]{2,63}$"
