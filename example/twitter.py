# coding: utf-8

import json
import logging

from flask import Flask, render_template_string
from flask_oauthflow.apps import twitter
from flask_oauthflow.web import OAuth, create_blueprint


app = Flask(__name__)
app.debug = True
# config.json holds TWITTER_CONSUMER_KEY and TWITTER_CONSUMER_SECRET
app.config.from_file('config.json', load=json.load, silent=True)

oauth = OAuth(app)
remote = twitter.register_to(oauth)
app.register_blueprint(create_blueprint(oauth, 'twitter'))


@app.route('/')
@oauth.auth_handler(optional=True)
def home(credentials):
    if credentials is None:
        return render_template_string(LOGGED_OUT)
    return render_template_string(HOME)


@app.route('/timeline')
@oauth.auth_handler()
def timeline(credentials):
    statuses = remote.get('statuses/home_timeline.json', token=credentials)
    return render_template_string(TIMELINE, statuses=statuses)


@app.route('/messages')
@oauth.auth_handler()
def messages(credentials):
    dms = remote.get('direct_messages.json', token=credentials)
    return render_template_string(MESSAGES, messages=dms)


@app.route('/follow')
@oauth.auth_handler()
def follow(credentials):
    profile = remote.post(
        'friendships/create.json',
        {'screen_name': 'gburd', 'follow': 'true'},
        token=credentials,
    )
    return render_template_string(FOLLOW, profile=profile)


LOGGED_OUT = '''<html><body>
<a href="/authorize">Authorize</a> or
<a href="/signin">Sign in with Twitter</a>
</body></html>'''

HOME = '''<html><body>
<p><a href="/timeline">timeline</a>
<p><a href="/messages">direct messages</a>
<p><a href="/follow">follow @gburd</a>
<p><a href="/logout">logout</a>
</body></html>'''

TIMELINE = '''<html><body>
<p><a href="/">home</a>
{% for status in statuses %}
<p><b>{{ status.user.name }}</b> {{ status.text }}
{% endfor %}
</body></html>'''

MESSAGES = '''<html><body>
<p><a href="/">home</a>
{% for message in messages %}
<p><b>{{ message.sender.name }}</b> {{ message.text }}
{% endfor %}
</body></html>'''

FOLLOW = '''<html><body>
<p><a href="/">home</a>
<p>You are now following
<a href="https://twitter.com/{{ profile.screen_name }}">{{ profile.name }}</a>
</body></html>'''


logger = logging.getLogger('flask_oauthflow')
logger.addHandler(logging.StreamHandler())
logger.setLevel(logging.DEBUG)


if __name__ == '__main__':
    app.run(port=8080)
