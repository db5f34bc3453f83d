"""Compose, read, list and delete a post through the Lambda handlers."""

import json

from handlers.compose_post.handler import handler as compose_handler
from handlers.delete_post.handler import handler as delete_handler
from handlers.get_post.handler import handler as get_handler
from handlers.list_posts.handler import handler as list_handler


def test_hello_world_lifecycle(
    aws_backend,
    lambda_context,
    compose_event,
    post_event,
    list_event,
    dynamodb_get_item,
    s3_get_object,
    object_exists,
    sample_image_binary,
) -> None:
    created = compose_handler(
        compose_event(
            {"postTitle": "Hello", "postContent": "World"},
            {"file": ("a.png", sample_image_binary, "image/png")},
        ),
        lambda_context,
    )
    assert created["statusCode"] == 201
    post_id = json.loads(created["body"])["post_id"]

    image_key = dynamodb_get_item(post_id)["image_key"]
    assert s3_get_object(image_key) == sample_image_binary

    listed = json.loads(list_handler(list_event, lambda_context)["body"])
    assert len(listed) == 1
    assert listed[0]["title"] == "Hello"
    assert listed[0]["content"] == "World"
    assert image_key in listed[0]["image_url"]

    detail = get_handler(post_event("GET", post_id), lambda_context)
    assert detail["statusCode"] == 200
    assert json.loads(detail["body"])["image_url"]

    deleted = delete_handler(post_event("DELETE", post_id), lambda_context)
    assert deleted["statusCode"] == 200
    assert deleted["body"] == "Post and image deleted"
    assert not object_exists(image_key)

    assert get_handler(post_event("GET", post_id), lambda_context)["statusCode"] == 404
    assert json.loads(list_handler(list_event, lambda_context)["body"]) == []
