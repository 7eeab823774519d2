# Google API
SHEETS_SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
VALUE_INPUT_OPTION = "RAW"

# Sheet layout
HEADER_ROWS = 1
FIRST_COLUMN = "A"
LAST_COLUMN = "I"
LEGACY_LAST_COLUMN = "H"

# Lead values
CALLED_STATUS = "Called"
FOLLOW_UP_SEPARATOR = ","
REMARK_SEPARATOR = "|"
REMARK_TEXT_SEPARATOR = "/"
