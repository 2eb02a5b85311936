"""Smart socket served and controlled over STP."""