from xhttp import Request


def test_redirect_followed_by_default(server):
    Request.get(f"{server}/redirect-source").send().expect_status(200).assert_field("success", True)


def test_redirect_not_followed(server):
    response = Request.get(f"{server}/redirect-source").follow_redirects(False).send()

    response.expect_status(302).expect_header("location", f"{server}/redirect-target")
