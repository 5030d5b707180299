from pydantic_settings import BaseSettings


REQUIRED_PARAMETERS = (
    "appstore-connect-token",
    "xcode-cloud-workflow-id",
    "git-branch-name",
)


class Settings(BaseSettings):
    app_name: str = "xcode-cloud-trigger"

    APP_STORE_CONNECT_BASE_URL: str = "https://api.appstoreconnect.apple.com/v1"
    GIT_REFERENCES_PAGE_LIMIT: int = 200

    LOG_ENABLED: bool = False
    LOG_LEVEL: str = "INFO"

    # CLI fallbacks; the core never reads these directly
    APPSTORE_CONNECT_TOKEN: str = ""
    XCODE_CLOUD_WORKFLOW_ID: str = ""
    GIT_BRANCH_NAME: str = ""

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
