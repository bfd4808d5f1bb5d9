
class GlobalMessages:
    # Contact Messages
    EMAIL_DISPATCH_FAILED = "Failed to send email. Try again later."
    OWNER_NOTIFICATION_SUBJECT = "📩 New Message from Your Portfolio Site"
    CLIENT_CONFIRMATION_SUBJECT = "✔ We have Received Your Message!"

    # Request Messages
    ORIGIN_NOT_ALLOWED = "Not allowed by CORS"
    INVALID_JSON_BODY = '"value" must be valid JSON'
    BODY_NOT_AN_OBJECT = '"value" must be of type object'
    INTERNAL_SERVER_ERROR = "Internal server error."
