"""Action sub-kinds the generator may emit, with their mandatory config keys."""

KIND = "action"

ACTIONS = [
    {
        "name": "Send Email",
        "description": "Send an email through the configured mail integration.",
        "required": ("emailTo", "emailSubject", "emailBody"),
        "example": {
            "actionType": "Send Email",
            "emailTo": "ops@example.com",
            "emailSubject": "New signup",
            "emailBody": "Please follow up with the new user",
        },
    },
    {
        "name": "Send Slack Message",
        "description": "Post a message to a Slack channel.",
        "required": ("slackChannel", "slackMessage"),
        "example": {
            "actionType": "Send Slack Message",
            "slackChannel": "#general",
            "slackMessage": "New event received from the webhook",
        },
    },
    {
        "name": "Create Ticket",
        "description": "Create a ticket in the issue tracker.",
        "required": ("ticketTitle", "ticketDescription"),
        "example": {
            "actionType": "Create Ticket",
            "ticketTitle": "Investigate error",
            "ticketDescription": "Error details from previous step",
            "ticketPriority": "2",
        },
    },
    {
        "name": "Find Issues",
        "description": "Search issues by assignee, team, status or label.",
        "required": (),
        "example": {
            "actionType": "Find Issues",
            "linearAssigneeId": "usr_123",
            "linearStatus": "in_progress",
            "linearLabel": "bug",
        },
    },
    {
        "name": "Database Query",
        "description": "Run a SQL query against the connected database.",
        "required": ("dbQuery",),
        "example": {
            "actionType": "Database Query",
            "dbQuery": "SELECT * FROM users LIMIT 10",
        },
    },
    {
        "name": "HTTP Request",
        "description": (
            "Make API calls to external services. Use this for REST APIs, weather APIs, "
            "or any structured data endpoint."
        ),
        "required": ("httpMethod", "endpoint"),
        "example": {
            "actionType": "HTTP Request",
            "httpMethod": "GET",
            "endpoint": "https://api.openweathermap.org/data/2.5/weather?q=London&appid=YOUR_API_KEY",
            "httpHeaders": "{}",
            "httpBody": "",
        },
    },
    {
        "name": "Generate Text",
        "description": "Generate text or a structured object with a language model.",
        "required": ("aiModel", "aiPrompt"),
        "example": {
            "actionType": "Generate Text",
            "aiModel": "meta/llama-4-scout",
            "aiFormat": "text",
            "aiPrompt": "Summarize the scraped markdown",
        },
    },
    {
        "name": "Generate Image",
        "description": "Generate an image from a prompt.",
        "required": ("imageModel", "imagePrompt"),
        "example": {
            "actionType": "Generate Image",
            "imageModel": "google/imagen-4.0-generate",
            "imagePrompt": "Hero image of a dashboard for the report",
        },
    },
    {
        "name": "Content Card",
        "description": "Render a text or image card from a prompt or an image source.",
        "required": ("cardType",),
        "example": {
            "actionType": "Content Card",
            "cardType": "text",
            "cardPrompt": "Prompt describing the content",
        },
    },
    {
        "name": "Scrape",
        "description": (
            "Scrape and extract content from HTML web pages (NOT for API calls). "
            "Use HTTP Request for APIs instead."
        ),
        "required": ("url",),
        "example": {"actionType": "Scrape", "url": "https://example.com"},
    },
    {
        "name": "Search",
        "description": "Search the web for a query.",
        "required": ("query",),
        "example": {"actionType": "Search", "query": "latest product launches", "limit": 5},
    },
    {
        "name": "Condition",
        "description": "Evaluate a boolean expression; connected nodes run only when it is true.",
        "required": ("condition",),
        "example": {
            "actionType": "Condition",
            "condition": "{{@Response:HTTP Request.status}} === 200",
        },
    },
]
