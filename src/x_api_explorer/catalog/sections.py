"""Built-in endpoint sections, one per API surface."""

from .base import Endpoint, ExpansionOption, ParamSchema
from .builder import CatalogBuilder, Section

TWEET_EXPANSIONS = (
    ExpansionOption(name="author_id", description="Expand the author user object."),
    ExpansionOption(name="referenced_tweets.id", description="Expand referenced tweet objects."),
    ExpansionOption(name="attachments.media_keys", description="Expand media objects."),
    ExpansionOption(name="geo.place_id", description="Expand location data."),
)

TWEETS = Section(
    name="tweets",
    label="Tweets",
    endpoints=(
        Endpoint(
            id="get-tweets",
            method="GET",
            path="/2/tweets",
            summary="Retrieve multiple Tweets specified by ID",
            query_params=[
                ParamSchema(
                    name="ids",
                    type="array",
                    required=True,
                    example="1460323737035677698,1293593516040269825",
                    description="A comma-separated list of Tweet IDs. Up to 100 are allowed.",
                ),
                ParamSchema(
                    name="tweet.fields",
                    type="array",
                    example="created_at,public_metrics",
                    description="A comma-separated list of Tweet fields to return.",
                ),
            ],
            expansion_options=TWEET_EXPANSIONS,
            category="lookup",
        ),
        Endpoint(
            id="get-tweet-by-id",
            method="GET",
            path="/2/tweets/:id",
            summary="Retrieve a single Tweet by ID",
            path_params=[
                ParamSchema(
                    name="id",
                    example="1460323737035677698",
                    description="The unique identifier of the Tweet to retrieve.",
                ),
            ],
            expansion_options=TWEET_EXPANSIONS[:3],
            category="lookup",
        ),
        Endpoint(
            id="post-tweet",
            method="POST",
            path="/2/tweets",
            summary="Create a new Tweet",
            body_params=[
                ParamSchema(name="text", required=True, example="Hello world!", description="The text of the Tweet."),
                ParamSchema(
                    name="reply",
                    type="object",
                    example='{"in_reply_to_tweet_id": "1460323737035677698"}',
                    description="Reply settings for the Tweet.",
                ),
                ParamSchema(
                    name="poll",
                    type="object",
                    example='{"options": ["yes", "no"], "duration_minutes": 120}',
                    description="A poll attached to the Tweet.",
                ),
                ParamSchema(
                    name="for_super_followers_only",
                    type="boolean",
                    description="Restrict the Tweet to Super Followers.",
                ),
            ],
            auth_type="oauth1a",
            category="manage",
        ),
        Endpoint(
            id="delete-tweet",
            method="DELETE",
            path="/2/tweets/:id",
            summary="Delete a Tweet",
            path_params=[
                ParamSchema(
                    name="id",
                    example="1460323737035677698",
                    description="The unique identifier of the Tweet to delete.",
                ),
            ],
            auth_type="oauth1a",
            category="manage",
        ),
    ),
)

USERS = Section(
    name="users",
    label="Users",
    endpoints=(
        Endpoint(
            id="get-users",
            method="GET",
            path="/2/users",
            summary="Look up multiple users based on IDs",
            query_params=[
                ParamSchema(
                    name="ids",
                    type="array",
                    required=True,
                    example="2244994945,6253282",
                    description="A comma-separated list of User IDs. Up to 100 allowed.",
                ),
            ],
            expansion_options=[
                ExpansionOption(name="pinned_tweet_id", description="Expand the pinned tweet object."),
                ExpansionOption(name="profile_image_url", description="Include profile image URL."),
            ],
        ),
        Endpoint(
            id="get-user-by-id",
            method="GET",
            path="/2/users/:id",
            summary="Look up a single user by ID",
            path_params=[
                ParamSchema(name="id", example="2244994945", description="The unique identifier of the User to retrieve."),
            ],
            expansion_options=[
                ExpansionOption(name="pinned_tweet_id", description="Expand the pinned tweet object."),
                ExpansionOption(name="description", description="Include user description."),
            ],
        ),
        Endpoint(
            id="get-user-by-username",
            method="GET",
            path="/2/users/by/username/:username",
            summary="Look up a single user by username",
            path_params=[
                ParamSchema(name="username", example="XDevelopers", description="The username (handle) to retrieve."),
            ],
            expansion_options=[
                ExpansionOption(name="pinned_tweet_id", description="Expand the pinned tweet object."),
                ExpansionOption(name="location", description="Include user location."),
            ],
        ),
    ),
)

WEBHOOK_ID = ParamSchema(
    name="webhook_id",
    example="1234567890123456789",
    description="The unique identifier of the webhook.",
)

ACCOUNT_ACTIVITY = Section(
    name="account_activity",
    label="Account Activity",
    endpoints=(
        Endpoint(
            id="get-webhooks",
            method="GET",
            path="/2/webhooks",
            summary="Returns all webhooks registered for the authenticating app.",
            category="webhooks",
        ),
        Endpoint(
            id="post-webhook",
            method="POST",
            path="/2/webhooks",
            summary="Registers a new webhook URL for the authenticating app.",
            body_params=[
                ParamSchema(
                    name="url",
                    required=True,
                    example="https://example.com/webhooks/x",
                    description="The URL to register as a webhook.",
                ),
            ],
            category="webhooks",
        ),
        Endpoint(
            id="delete-webhook",
            method="DELETE",
            path="/2/webhooks/:webhook_id",
            summary="Removes the webhook for the provided webhook_id.",
            path_params=[WEBHOOK_ID],
            category="webhooks",
        ),
        Endpoint(
            id="put-webhook-crc",
            method="PUT",
            path="/2/webhooks/:webhook_id",
            summary="Triggers a CRC check for the given webhook. Returns no body on success.",
            path_params=[WEBHOOK_ID],
            category="webhooks",
        ),
        Endpoint(
            id="post-subscription",
            method="POST",
            path="/2/account_activity/webhooks/:webhook_id/subscriptions/all",
            summary="Subscribes the authenticating user to account activity events.",
            path_params=[WEBHOOK_ID],
            auth_type="oauth1a",
            category="subscriptions",
        ),
        Endpoint(
            id="delete-subscription",
            method="DELETE",
            path="/2/account_activity/webhooks/:webhook_id/subscriptions/:user_id/all",
            summary="Deactivates the subscription for the given user.",
            path_params=[
                WEBHOOK_ID,
                ParamSchema(name="user_id", example="2244994945", description="The user to unsubscribe."),
            ],
            category="subscriptions",
        ),
    ),
)


def default_builder() -> CatalogBuilder:
    """Builder preloaded with the built-in surfaces."""
    return CatalogBuilder().with_section(TWEETS).with_section(USERS).with_section(ACCOUNT_ACTIVITY)
