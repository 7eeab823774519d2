from prometheus_client import Counter, Histogram

# Google Sheets API
SHEETS_API_CALLS = Counter(
    'sheets_api_calls_total',
    'Total number of Google Sheets API calls',
    ['operation', 'outcome']
)

SHEETS_API_DURATION = Histogram(
    'sheets_api_duration_seconds',
    'Time spent waiting on the Google Sheets API',
    ['operation'],
    buckets=[0.1, 0.25, 0.5, 1.0, 2.0, 5.0]
)

# Lead updates
LEAD_UPDATES = Counter(
    'lead_updates_total',
    'Total number of lead updates written',
    ['kind']
)
