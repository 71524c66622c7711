from flask import Blueprint, jsonify
from mismo import registry

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the Mismo game server!'})

@main.route('/health')
def health():
    return jsonify({'status': 'ok', 'sessions': len(registry)})
