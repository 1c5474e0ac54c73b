"""QR Code encoding: data segments, error correction and symbol drawing."""