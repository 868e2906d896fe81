from fastapi import APIRouter, Request
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask
from postdir_lib.posts.errors import PostServiceError
from postdir_lib.posts.models import DeletedPost, Post, PostUpdate
from postdir_lib.services.resolver import get_post_service
import json
import logging

router = APIRouter()
logger = logging.getLogger(__name__)

NDJSON_MEDIA_TYPE = 'application/x-ndjson'


def _ndjson_lines(stream):
    """Encode a post stream as NDJSON lines.

    A failure after the response has started cannot change the status
    code, so it is written as a final `{"error": ..., "message": ...}` line.
    """
    with stream:
        try:
            for post in stream:
                yield post.model_dump_json() + '\n'
        except PostServiceError as e:
            logger.error('Post stream aborted after %d items: %s', stream.delivered, e.message)
            yield json.dumps(e.to_dict()) + '\n'


# Handlers are sync so the blocking store calls run in the worker thread pool.
@router.get('/posts')
def api_posts(request: Request):
    post_svc = get_post_service(request)
    stream = post_svc.stream_posts()
    # The background close also runs when the client disconnects mid-stream.
    return StreamingResponse(
        _ndjson_lines(stream),
        media_type=NDJSON_MEDIA_TYPE,
        background=BackgroundTask(stream.close),
    )


@router.get('/posts/{post_id}', response_model=Post)
def api_read_post(post_id: str, request: Request):
    post_svc = get_post_service(request)
    return post_svc.read_post(post_id)


@router.put('/posts/{post_id}', response_model=Post)
def api_update_post(post_id: str, payload: PostUpdate, request: Request):
    post_svc = get_post_service(request)
    return post_svc.update_post(post_id, payload.owner_id, payload.title, payload.body)


@router.delete('/posts/{post_id}', response_model=DeletedPost)
def api_delete_post(post_id: str, request: Request):
    post_svc = get_post_service(request)
    return DeletedPost(post_id=post_svc.delete_post(post_id))
