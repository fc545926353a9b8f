class InternalURIs:
    ROOT = "/"
    HEALTHZ = "/healthz"
    API = "/api"
    V1 = API + "/v1"
    EVALUATE_TEXT = V1 + "/evaluate/text"
    EVALUATE_URL = V1 + "/evaluate/url"
    EVALUATE_DOCUMENT = V1 + "/evaluate/document"
    STATE = V1 + "/state"


class MediaTypes:
    PDF = "application/pdf"
    DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
