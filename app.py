from flask import Flask, render_template, request
from flask_socketio import SocketIO, emit
from game.session import Session, MODES
import logging, os

app = Flask(__name__)
app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY', 'a_secret_key')
app.config['COMPUTER_DELAY'] = 0.55  # seconds of "thinking" before the computer plays
socketio = SocketIO(app)
logger = logging.getLogger(__name__)

sessions = {}

# --- Routes ---
@app.route('/')
def index(): return render_template('index.html', modes=MODES)

# --- Helper Functions ---
def push_state(sid):
    session = sessions.get(sid)
    if session: socketio.emit("state", session.state.to_dict(), to=sid)

def schedule_computer(sid):
    session = sessions.get(sid)
    if not session: return
    token = session.begin_computer_turn()
    if token is not None: socketio.start_background_task(computer_turn, sid, token)

def computer_turn(sid, token):
    socketio.sleep(app.config['COMPUTER_DELAY'])
    session = sessions.get(sid)
    # restart, mode change or disconnect during the delay invalidates the token
    if not session or not session.finish_computer_turn(token):
        logger.debug("dropped stale computer turn %s for %s", token, sid)
        return
    push_state(sid)

def parse_cell(data):
    cell = data.get("cell") if isinstance(data, dict) else None
    if isinstance(cell, bool) or not isinstance(cell, int) or not 0 <= cell < 9: return None
    return cell

# --- SocketIO Events ---
@socketio.on("connect")
def connect():
    sessions[request.sid] = Session()
    logger.info("session opened: %s", request.sid)
    emit("state", sessions[request.sid].state.to_dict())

@socketio.on("disconnect")
def disconnect(*args):
    if sessions.pop(request.sid, None): logger.info("session closed: %s", request.sid)

@socketio.on("move")
def move(data):
    sid = request.sid; session = sessions.get(sid)
    cell = parse_cell(data)
    if not session or cell is None:
        logger.debug("ignored malformed move %r from %s", data, sid); return
    if not session.play(cell):
        logger.debug("rejected move %s from %s", cell, sid); return
    emit("state", session.state.to_dict())
    schedule_computer(sid)

@socketio.on("mode")
def mode(data):
    sid = request.sid; session = sessions.get(sid)
    new_mode = data.get("mode") if isinstance(data, dict) else None
    if not session or not session.change_mode(new_mode):
        logger.debug("ignored mode change %r from %s", data, sid); return
    emit("state", session.state.to_dict())

@socketio.on("restart")
def restart(*args):
    session = sessions.get(request.sid)
    if not session: return
    session.restart()
    emit("state", session.state.to_dict())

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    socketio.run(app, debug=True, allow_unsafe_werkzeug=True)
