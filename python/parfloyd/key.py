import hashlib

def _generate_library_key(code, flags):
    s = f"{code}+{flags}"
    h = hashlib.new("sha256")
    h.update(s.encode("ascii"))
    return h.hexdigest()
