"""
Entry-point WSGI para gunicorn em producao.
Uso: gunicorn -k geventwebsocket.gunicorn.workers.GeventWebSocketWorker -b 127.0.0.1:5000 transfill.wsgi:app
"""

from transfill.app import create_app, socketio

app = create_app()

if __name__ == '__main__':
    socketio.run(app, host='0.0.0.0', port=5000)
