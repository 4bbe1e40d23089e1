from mangum import Mangum

from taskbri.main import app

# ASGI handler for serverless deployment
handler = Mangum(app, lifespan="auto")

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
