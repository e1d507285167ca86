# API schemas package
