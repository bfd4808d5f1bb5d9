import uvicorn

from portfolio_contact.common.config import settings

if __name__ == "__main__":
    uvicorn.run("portfolio_contact.main:app", host=settings.HOST, port=settings.PORT)
