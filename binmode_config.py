HEADER = b'binmode-rpc:'

# 消息标签
TAG_CALL = 'C'
TAG_RESPONSE = 'R'
TAG_FAULT = 'F'

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
INDENT = '  '

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
