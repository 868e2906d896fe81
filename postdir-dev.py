# Development server for the post directory using the in-memory store
from postdir_lib.main import create_app, Config
from postdir_lib.storage import MemoryPostStore

store = MemoryPostStore()
store.insert_one({'user_id': 'u1', 'title': 'Hello', 'body': 'First post'})
store.insert_one({'user_id': 'u2', 'title': 'Again', 'body': 'Second post'})
app = create_app(Config(storage_backend='memory', store=store))
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
