from dotenv import load_dotenv
from tcc_api.src.api_app import create_app
from tcc_api.helper.utils import setup_logging

load_dotenv()
logger = setup_logging()

app = create_app()


if __name__ == "__main__":
    import os
    import uvicorn

    port = int(os.getenv("PORT", "5214"))
    logger.info(f"starting TCC Test API on port {port}")
    uvicorn.run("app:app", host="0.0.0.0", port=port)
