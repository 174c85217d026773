"""Trigger sub-kinds the generator may emit."""

KIND = "trigger"

TRIGGERS = [
    {
        "name": "Manual",
        "description": "Run only when manually executed.",
        "required": (),
        "example": {"triggerType": "Manual"},
    },
    {
        "name": "Schedule",
        "description": "Run on a cron schedule (cron + timezone required).",
        "required": ("scheduleCron", "scheduleTimezone"),
        "example": {
            "triggerType": "Schedule",
            "scheduleCron": "0 9 * * *",
            "scheduleTimezone": "America/New_York",
        },
    },
    {
        "name": "Webhook",
        "description": "Run on inbound HTTP request. Use webhookSchema/mockRequest when needed.",
        "required": (),
        "example": {
            "triggerType": "Webhook",
            "webhookSchema": "[]",
            "webhookMockRequest": "{}",
        },
    },
]
