import os

from sentiment_proxy import create_app

app = create_app(os.environ.get('APP_CONFIG', 'default'))

if __name__ == "__main__":
    # Default port matches the frontend dev setup
    port = int(os.environ.get('PORT', 8787))
    app.run(host="0.0.0.0", port=port, debug=app.config['DEBUG'])
