import os
from config import IS_PRODUCTION
from api.index import app

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=int(os.getenv("PORT", "8000")), reload=not IS_PRODUCTION)
